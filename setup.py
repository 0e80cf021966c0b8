from pathlib import Path
from setuptools import setup, find_packages


BASE_DIR = Path(__file__).parent
with open(BASE_DIR / "dcmcore" / "_version.py") as f:
    exec(f.read())

with open(BASE_DIR / 'README.md') as f:
    long_description = f.read()


setup(
    name="dcmcore",
    version=__version__,  # noqa: F821
    author="dcmcore contributors",
    description=(
        "Read, validate and write DICOM attribute lists and RLE pixel data"
    ),
    long_description=long_description,
    long_description_content_type='text/markdown',
    license="MIT",
    keywords="dicom python medical imaging",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Intended Audience :: Developers",
        "Intended Audience :: Healthcare Industry",
        "Intended Audience :: Science/Research",
        "Development Status :: 4 - Beta",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
        "Topic :: Software Development :: Libraries"
    ],
    packages=find_packages(include=["dcmcore", "dcmcore.*"]),
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.10',
    install_requires=["numpy"],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": ["dcmcore=dcmcore.cli.main:main"],
        "dcmcore_subcommands": [
            "show = dcmcore.cli.show:add_subparser"
        ],
    },
)
