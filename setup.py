import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="openapi_dereferencer",
    version="0.1.0",
    description="Resolve the internal $ref pointers of OpenAPI 3.1 documents into self-contained documents",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="openapi json schema ref dereference",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "openapi_deref=openapi_dereferencer.cli:openapi_deref",
        ],
    },
    include_package_data=True,
    package_data={
        "openapi_dereferencer": ["tests/test_data/*.json"],
    },
    zip_safe=False,
)
