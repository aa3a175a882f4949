#!/usr/bin/env python

from setuptools import setup, find_packages

PACKAGE_NAME = 'mate_selection'

setup(
    name=PACKAGE_NAME.replace('_', '-'),
    version='0.1',
    description='Mate selection strategies for evolutionary algorithms: which individuals of a scored population to pair.',
    packages=find_packages(include=(f'{PACKAGE_NAME}*',)),
    python_requires='>=3.10',
    install_requires=['attrs', 'numpy'],
    extras_require={'test': ['pytest']},
)
