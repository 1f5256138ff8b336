#!/usr/bin/env python3
"""
mahony_ahrs Setup Script
"""

from setuptools import setup, find_packages

setup(
    name='mahony_ahrs',
    version='1.0.0',
    description='Quaternion Mahony complementary filter for IMU/AHRS attitude estimation',
    author='FurSys AI Team',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'pyyaml>=5.4.0',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.0.0',
        ],
    },
)
