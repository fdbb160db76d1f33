from setuptools import setup
from imqslog import __version__

setup(
    name="imqslog",
    long_description="imqslog is a leveled, rotating-file logger with a consistent line format, "
    "console mirroring for containers and an optional remote error reporter.",
    version=__version__,
    packages=[
        "imqslog",
        "imqslog.commands",
    ],
    include_package_data=True,
    install_requires=[
        "click>=8.0.3,<9.0.0",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde>=0.12.0,<1.0.0",
        "requests>=2.31.0,<3.0.0",
        "humanfriendly>=10.0.0,<11.0.0",
        "beartype>=0.17.0,<1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "requests-mock>=1.11.0",
        ],
    },
    entry_points="""
        [console_scripts]
        imqslog=imqslog.cli:cli
    """,
)
