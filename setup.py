from pathlib import Path

from setuptools import find_packages, setup

about: dict = {}
exec(Path(__file__).with_name("src").joinpath("typedsig", "__about__.py").read_text(), about)

if __name__ == "__main__":
    setup(
        name="typedsig",
        version=about["__version__"],
        description="EIP-712 typed data hashing and secp256k1 signatures in pure Python",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.9",
        extras_require={"test": ["pytest"]},
    )
