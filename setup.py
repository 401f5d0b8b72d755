"""Setup script for simelastic package."""

from setuptools import setup, find_packages

setup(
    name='simelastic',
    version='1.0',
    packages=find_packages(include=['simelastic', 'simelastic.*']),
    package_data={'simelastic': ['config/defaults.yaml']},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'pyyaml>=5.4',
    ],
    extras_require={
        'tests': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': ['simelastic=simelastic.cli:main'],
    },
)
