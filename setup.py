"""Package setup for hilink."""

from setuptools import setup, find_packages

setup(
    name="hilink-webui",
    version="1.0.0",
    description="Client for the Huawei HiLink WebUI (HTTP/XML) API of LTE routers and modems",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
