from setuptools import setup, find_packages

setup(
    name="service_locator",
    version="1.0.0",
    packages=find_packages(include=["service_locator", "service_locator.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    author="Service Locator Developers",
    author_email="your.email@example.com",
    description="Framework-agnostic service locator with pluggable storage adapters",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
)
