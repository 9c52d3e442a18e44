# coding=utf-8
"""Setup package 'bigrational'."""

import re
from setuptools import setup

with open('README.md') as file:
    long_description = file.read()

with open('src/bigrational/version.py') as file:
    version = re.search(r"^version = '([^']+)'", file.read(),
                        re.MULTILINE).group(1)

setup(
    name="bigrational",
    version=version,
    author="Michael Amrhein",
    author_email="michael@adrhinum.de",
    url="https://github.com/mamrhein/bigrational",
    description="Rational numbers of arbitrary length and precision",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={'': 'src'},
    packages=['bigrational'],
    python_requires=">=3.8",
    extras_require={
        'test': ["pytest", "hypothesis"],
    },
    license='BSD',
    keywords='rational number datatype fraction',
    platforms='all',
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules"
        ],
    zip_safe=False,
    )
