# #!/usr/bin/env python

"""setup.py script for mezr library"""

from setuptools import setup, find_packages

setup(
    name='mezr',
    version='1.0.0',
    description='Immutable measurement value types built from unit conversion tables',
    python_requires='>=3.9',
    packages=find_packages(include=['mezr', 'mezr.*']),
    package_data={'mezr': ['assets/*.toml', 'assets/.*.toml']},
    include_package_data=True,
    install_requires=[
        'typing_extensions>=4.0',
        'tomli>=2.0; python_version < "3.11"',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'mezr=mezr.__main__:main',
        ],
    },
)
