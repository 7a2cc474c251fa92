"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def jsonapi_utils_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "0.1.0"

    setup(
        name="jsonapi-utils",
        packages=find_packages(exclude=["tests", "tests.*"]),
        version=version,
        license="MIT",
        description="jsonapi-utils : JSON:API pagination, record counting and request params for Flask-SQLAlchemy",
        long_description=open("README.rst").read(),
        keywords=["SqlAlchemy", "Flask", "JsonAPI", "Pagination"],
        python_requires=">=3.9, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: MIT License",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.9",
        ],
        extras_require={"test": ["pytest>=7", "Flask-SQLAlchemy>=3.0"]},
    )


jsonapi_utils_setup()  # pragma: no cover
