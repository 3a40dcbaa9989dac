#!/usr/bin/env python3
"""
head_attitude Setup Script
"""

from setuptools import setup, find_packages

setup(
    name='head_attitude',
    version='1.0.0',
    description='Headphone / handheld device relative attitude system',
    author='FurSys AI Team',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'pyyaml>=5.4.0',
        'pandas>=1.3.0',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'head_attitude=head_attitude.main:main',
        ],
    },
)
