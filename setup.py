
import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()


install_requires = [
    "loguru==0.7.3",
    "tenacity==9.0.0",
    "pydantic==2.10.3"
]

extras_require = {
    "test": [
        "pytest"
    ]
}

setuptools.setup(
    name="cc-run",
    version="0.1.0",
    description="Claude Code launcher that switches between the official API and third-party Anthropic-compatible endpoints.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "cc-run=ccrun.scripts.cc_run:main"
        ]
    },
    classifiers=(
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
    ),
)
