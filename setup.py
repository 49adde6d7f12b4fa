from setuptools import setup, find_packages

setup(
    name="adcraft",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "adcraft.core": ["*.json"],
        "adcraft.schemas": ["*.json"],
    },
    install_requires=[
        "click>=8.0.0",
        "requests>=2.25.0",
        "pillow>=10.1.0",
        "pyyaml>=6.0",
        "openai>=1.0.0",
        "jsonschema>=4.0.0",
        "python-dotenv>=0.19.0",
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "adcraft=adcraft.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Creative generation pipeline for multi-format ad campaigns",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
