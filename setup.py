from setuptools import setup

setup(
    name='teach',
    version='0.1.0',
    description="Problem sheets, courseworks and Makefiles for a course",
    packages=[
        'teach',
        'teach.commands' ],
    package_dir={'teach' : 'source/teach'},
    python_requires='>=3.7',
    install_requires=[
        'typing_extensions',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['teach = teach.__main__:run'],
    },
)
