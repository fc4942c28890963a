from setuptools import setup

from kdbxbrowser import __version__

if __name__ == '__main__':
    setup(
        name='kdbxbrowser',
        version=__version__,
        description='Interactive terminal browser for KeePass databases',
        packages=['kdbxbrowser'],
        python_requires='>=3.8',
        install_requires=[
            'colorama',
            'prompt_toolkit>=3.0.30',
            'pykeepass>=4.0',
        ],
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'kdbx-browser=kdbxbrowser.__main__:main',
            ],
        },
    )
