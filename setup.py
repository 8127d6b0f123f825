from setuptools import setup, find_packages

setup(
    name="priority-queue-sim",
    version="0.1.0",
    description="Discrete event simulation of a finite queueing network with priority buffering",
    author="adamfilli",
    packages=find_packages(include=["prioritysim", "prioritysim.*"]),
    install_requires=[
        "matplotlib",
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "prioritysim=prioritysim.cli:main",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
