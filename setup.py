#!/usr/bin/env python
"""
sentry-core
===========

sentry-core is the shared core of an asyncio Sentry SDK. It turns
exceptions and messages into events, merges scope data, samples and
filters them and delivers them through a bounded request buffer.
"""

from setuptools import setup, find_packages


version = '1.0.0'

install_requires = [
    'aiohttp>=3.7',
]

tests_require = [
    'flake8',
    'mock',
    'pytest>=6.0',
    'pytest-asyncio',
    'pytest-mock',
    'pytest-timeout',
]


setup(
    name='sentry-core',
    version=version,
    author='Sentry',
    author_email='hello@getsentry.com',
    url='https://github.com/getsentry/sentry-python',
    description='Core client pipeline for Sentry (https://getsentry.com)',
    long_description=__doc__,
    packages=find_packages(exclude=("tests", "tests.*",)),
    zip_safe=False,
    python_requires='>=3.7',
    extras_require={
        'tests': tests_require,
    },
    license='BSD',
    install_requires=install_requires,
    include_package_data=True,
    classifiers=[
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Operating System :: OS Independent',
        'Framework :: AsyncIO',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python',
        'Topic :: Software Development',
    ],
)
