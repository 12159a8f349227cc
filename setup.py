from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ovntopo",
    version="0.3.0",
    description="Host network topology for OVN-Kubernetes clusters.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"ovntopo.schemas": ["*.json"]},
    python_requires=">=3.9",
    install_requires=["networkx", "PyYAML", "jsonschema"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["ovntopo=ovntopo.cli:main"]},
)
