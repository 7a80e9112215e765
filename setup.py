from setuptools import setup, find_packages
import pathlib

# Detect layout
use_src = pathlib.Path("src/json2csv").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="json2csv-tools",
    version="0.1.0",
    description="Convert JSON objects and arrays to CSV/TSV with declarative field specs",
    python_requires=">=3.9",
    include_package_data=True,
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "Jinja2",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["json2csv=json2csv.cli:app"],
    },
    **pkg_args
)
