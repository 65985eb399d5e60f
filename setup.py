from setuptools import setup, find_packages

setup(
    name="jfeed",
    version="1.0.0",
    description="Lenient reader and minimal writer for JSON Feed version 1 documents",
    packages=find_packages(include=["jfeed", "jfeed.*"]),
    install_requires=[
        "requests>=2.31.0",
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "jfeed=jfeed.cli:main",
        ],
    },
    python_requires=">=3.9",
)
