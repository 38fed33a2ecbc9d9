from setuptools import setup, find_packages

setup(
    name="ely",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="Developer CLI utilities: directory size report, batch exec across subdirectories, build/pack.",
    python_requires=">=3.8",
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ely=ely.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
