from setuptools import setup, find_packages

setup(
    name='mapwatch',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=['python-ptrace>=0.9.1', 'colorlog'],
    extras_require={
        'test': ['pytest']
    },
    python_requires='>=3.6',
    entry_points={
        'console_scripts': ['mapwatch = mapwatch.__main__:main']
    },
)
