# setup.py
from setuptools import setup, find_packages

setup(
    name="response-schema",           # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["pandas"],      # DataFrame / NaT aware type tags
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,        # so we can bundle the JSON catalogs
    package_data={
        "response_schema.schemas": ["*.json"],
    },
    python_requires=">=3.9",
    description="Fail-fast runtime schema validation for API responses and other untrusted data",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
