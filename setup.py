from setuptools import setup, find_packages

setup(
    name="memory_match",
    version="0.1.0",
    packages=find_packages(include=["memory_core*", "memory_config*", "desktop_ui*"]),
    py_modules=["main"],
    package_data={"desktop_ui": ["qml/*.qml"]},
    install_requires=[
        "PySide6>=6.7",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["memory-match=desktop_ui.app:main"],
    },
    python_requires=">=3.10",
)
