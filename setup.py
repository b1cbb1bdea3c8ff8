from setuptools import setup, find_packages

setup(
    name="mkdocs-doxyrs",
    version="0.3.0",
    description="Doxygen to rustdoc comment translation, with an MkDocs plugin",
    keywords="mkdocs doxygen rustdoc bindgen documentation python",
    author="mkdocs-doxyrs contributors",
    license="MIT",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "mkdocs>=1.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "doxyrs = mkdocs_doxyrs.plugin:DoxyrsPlugin",
        ],
    },
)
