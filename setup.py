from setuptools import setup, find_packages

setup(
    name="silence-splitter",
    version="0.1.0",
    description="Split audio files at detected silences with FFmpeg",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydub>=0.25.1",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "silence-splitter=silence_splitter.cli:main",
        ],
    },
)
