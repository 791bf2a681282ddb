from setuptools import setup, find_packages

setup(
    name="tigerhash",
    version="0.1.0",
    description="Pure-Python Tiger (192-bit) hash with a hashlib-style streaming API, plus helpers for files and columnar data.",
    long_description=open("Readme.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "dataframes": ["pandas"],
        "arrow": ["pyarrow"],
        "polars": ["polars"],
        "test": ["pytest"],
    },
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
    ],
    zip_safe=False,
)
