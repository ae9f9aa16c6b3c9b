from setuptools import setup, find_packages

setup(
    name="imgconv",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "Pillow>=9.1",
        "numpy",
        "opencv-python",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "imgconv=imgconv.cli:main",
        ],
    },
)
