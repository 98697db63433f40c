from setuptools import setup, find_namespace_packages

setup(
    name='gitt',
    version='0.1',
    description='Git repository viewer in your terminal',
    classifiers=[
        'Topic :: Software Development :: Version Control :: Git',
        'Environment :: Console :: Curses',
        'Intended Audience :: Developers',
    ],
    packages=find_namespace_packages(include=['gitt', 'gitt.*']),
    entry_points={
        'console_scripts': ['gitt=gitt.__main__:main']
    },
    python_requires='>= 3.11',
    install_requires=[
        'pygit2 >= 1.14',
        'wcwidth',
    ],
    extras_require={
        'memory-indicator': ['psutil'],
        'test': ['pytest'],
    },
    tests_require=[
        'pytest',
    ],
)
