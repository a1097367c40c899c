# setup.py
from setuptools import setup, find_packages


def parse_reqs(fname="requirements.txt"):
    with open(fname) as f:
        # strip comments and empty lines
        return [l.strip() for l in f if l.strip() and not l.startswith("#")]


setup(
    name="droughtindices",
    version="0.1.0",
    description="Standardized Drought Condition Index from Landsat 8 and precipitation rasters",
    package_dir={"droughtindices": "droughtindices"},
    packages=find_packages(include=["droughtindices", "droughtindices.*"]),
    install_requires=parse_reqs(),
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    python_requires=">=3.10",
    entry_points={"console_scripts": ["droughtindices=droughtindices.core.cli:cli"]},
)
