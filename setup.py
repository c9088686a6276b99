from setuptools import find_packages, setup

setup(
    name="timezonebvh",
    version="1.0.0",
    description="builds a bounding volume hierarchy (BVH) spatial index of the timezone polygons",
    python_requires=">=3.8",
    packages=find_packages(include=["timezonebvh", "timezonebvh.*"]),
    install_requires=[
        "numpy>=1.21",
        "pydantic>=2.5",
        "typing_extensions>=4.6",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["timezonebvh=timezonebvh.command_line:main"],
    },
)
