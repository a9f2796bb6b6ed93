import re

from typing import ( TypeVar, Any,
    Callable, Iterable, Mapping,
    List, Tuple, Pattern, )
V = TypeVar('V')

KeyFunc = Callable[[str], Any]

def natural_keyfunc( string: str,
    *, _digit_regex: Pattern = re.compile(r'(\d+)')
) -> Any:
    """
    Sort key placing 'sheet2' before 'sheet10'.
    """
    assert isinstance(string, str), type(string)
    return [
        item
            if i % 2 == 0 else
        (int(item), item)
        for i, item in enumerate(_digit_regex.split(string))
    ]

def natural_sorted( strings: Iterable[str],
    *, keyfunc: KeyFunc = natural_keyfunc
) -> List[str]:
    return sorted(strings, key=keyfunc)

def mapping_ordered_items( mapping: Mapping[str, V],
    *, keyfunc: KeyFunc = natural_keyfunc
) -> List[Tuple[str, V]]:
    """
    Return persistently ordered mapping items.

    Only works with string keys. Order of the mapping itself is ignored,
    so that output does not depend on the way the mapping was filled.
    """
    def item_keyfunc(item: Tuple[str, V]) -> Any:
        key, value = item # pylint: disable=unused-variable
        return keyfunc(key)
    return sorted(mapping.items(), key=item_keyfunc)
