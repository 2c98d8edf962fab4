from setuptools import find_packages, setup

setup(
    name="camera-evolution",
    version="0.1.0",
    description="Render single camera frames through simulated photographic eras.",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "Pillow>=9.1",
        "tifffile",
        "pillow-heif",
        "rawpy",
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "camera-evolution=camera_evolution.cli:main",
        ],
    },
)
