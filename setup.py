"""Setup script for Furima Market"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="furima-market",
    version="1.0.0",
    author="Furima Market developers",
    description="Flea-market web app for listing, editing and buying items",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=[
        "config",
        "web_app",
        "routes_auth",
        "routes_items",
        "routes_transactions",
        "run_migrations",
    ],
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: Flask",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-Login>=0.6.3",
        "Flask-Session>=0.8.0",
        "redis>=5.0.0",
        "Werkzeug>=3.0.0",
        "python-dotenv>=1.0.0",
        "psycopg2-binary>=2.9.9",
        "pydantic>=2.5.0",
        "Pillow>=10.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
)
