from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="map_annotation",
    version=Path("./map_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["map_annotation", "map_annotation.*"]),
    package_data={"map_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=["easydict"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["map_annotation=map_annotation.cli:main"],
    },
)
