from setuptools import setup

VERSION = "0.3.0"

setup(
    name="aioqstash",
    version=VERSION,
    license="GPL v3",
    author="aioqstash contributors",
    url="https://github.com/aioqstash/aioqstash",
    download_url="https://github.com/aioqstash/aioqstash/tarball/{}".format(VERSION),
    description=("Asyncio client for the QStash messaging and scheduling API."),
    long_description=(""),
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords=["qstash", "upstash", "queue", "asyncio"],
    zip_safe=False,
    platforms="any",
    packages=["aioqstash"],
    python_requires=">=3.11",
    install_requires=[
        "aiohttp>=3.9.0",
        "attrs>=19.3",
        "multidict>=6.0",
        "pytz>=2019.3",
        "voluptuous>=0.13.1",
        "yarl>=1.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-aiohttp>=1.0.5",
            "pytest-asyncio>=0.23",
        ],
    },
)
