# -*- coding: utf-8 -*-

from setuptools import find_packages, setup

requires = ["python-dateutil", "python-rapidjson", "requests", "typing_inspect"]

tests_require = ["pytest", "pytest-benchmark", "dataslots"]

setup(
    name="shapeval",
    version="0.1.0",
    description="Declarative validation and parsing of untyped data",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=requires,
    tests_require=tests_require,
    extras_require={"test": tests_require},
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
    zip_safe=False,
)
