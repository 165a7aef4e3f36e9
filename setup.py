from setuptools import setup, find_packages

setup(
    name="tellersim",
    version="0.1.0",
    description="Tick-by-tick simulation of a teller counter with a FIFO waiting line",
    author="adamfilli",
    packages=find_packages(include=["tellersim", "tellersim.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
