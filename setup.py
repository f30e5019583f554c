"""Setup script for the lab publications package."""
from setuptools import setup, find_packages

setup(
    name="lab-publications",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "aiohttp>=3.8.0",
        "bibtexparser>=1.4,<2",
        "flask>=2.0.0",
        "pylatexenc>=2.10",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    description="Fetches, parses and caches a researcher's dblp publication list for a lab website",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="dblp bibtex publications bibliography",
    include_package_data=True,
    classifiers=[
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Text Processing :: Markup",
    ],
)
