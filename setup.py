from setuptools import setup, find_packages


setup(
    name="unirand",
    version="0.1",
    packages=find_packages(include=["unirand", "unirand.*"]),
    description="Unbiased uniform integer and floating-point distributions over pluggable pseudo-random generators.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
        "argon2-cffi>=23.1.0",
    ],
    entry_points={
        "console_scripts": [
            "unirand=unirand.cli:main",
        ]
    },
)
