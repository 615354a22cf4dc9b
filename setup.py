from setuptools import setup, find_packages

version = open('VERSION').read().strip()

setup(
    name="saucebrowsers",
    version=version,
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="Resolve loose browser specifications to Sauce Labs "
    "capabilities.",
    license="MPL 2.0",
    keywords=["selenium", "testing", "saucelabs"],
    install_requires=[
        "rich",
        "selenium",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "saucebrowsers=saucebrowsers.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3 :: Only",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
        "Operating System :: POSIX",
        "Topic :: Software Development :: Testing",
        "Topic :: Software Development :: Quality Assurance"
    ],
)
