# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="rocket",
    version="0.3.0",
    description="Directive evaluator for the Rocket markup language",
    packages=find_namespace_packages(include=["rocket", "rocket.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
