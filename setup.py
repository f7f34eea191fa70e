# pip install -e .[test]
from setuptools import find_packages, setup


INSTALL_REQUIRES = [
    "numpy>=1.22",
]

EXTRAS_REQUIRE = {
    "test": ["pytest>=7.0"],
}


def main() -> None:
    """Main setup function"""
    setup(
        name="multiway-heap",
        version="0.1.0",
        description=(
            "Priority queues on d-ary heaps with arbitrary and power-of-two "
            "branching factors, including an indexed variant."
        ),
        packages=find_packages(include=["src", "src.*"]),
        python_requires=">=3.9",
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        zip_safe=False
    )


if __name__ == "__main__":
    main()
