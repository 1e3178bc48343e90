from setuptools import setup

# keep in sync with nbsyncclient.NBSYNCCLIENT_VERSION
NBSYNCCLIENT_VERSION = "0.2.0"

with open("README.rst") as f:
    description_text = f.read()

setup(
    name="nbsyncclient",
    version=NBSYNCCLIENT_VERSION,
    author="nbsyncclient maintainers",
    packages=[
        "nbsyncclient",
        "nbsyncclient.model",
        "nbsyncclient.store",
        "nbsyncclient.test",
        "nbsyncclient.util"
    ],
    package_dir={"nbsyncclient": "nbsyncclient"},
    test_suite="nbsyncclient.test.test_all",
    license="LGPL",
    description="Client that keeps a bounded snapshot of the content tree and kernel sessions of a notebook server.",
    include_package_data=True,
    long_description=description_text,
    python_requires=">=3.6",
    install_requires=[
        "setuptools",
        "requests >= 2.0.0",
        "appdirs >= 1.2.0",
        "requests-futures >= 0.9.0"
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
    ]
)
