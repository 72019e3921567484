""" slip10zk build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import slip10zk

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=slip10zk.name,
    version=slip10zk.__version__,
    license=slip10zk.__license__,
    author=slip10zk.__author__,
    author_email=slip10zk.__author_email__,
    description="R1CS circuit proving two ed25519 SLIP-0010 keys share a seed",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["dataclasses_json", "py_ecc"],
    extras_require={"test": ["pytest", "pytest-order"]},
    keywords=(
        "zero-knowledge r1cs zk-snark ed25519 slip-0010 "
        "hd-wallet sha512 hmac foreign-field"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
