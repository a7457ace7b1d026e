import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="tessera",
    version="0.1.0",
    author="Fredrik Feyling",
    author_email="fredrik.feyling@hotmail.com",
    description="Procedural IC layout composition: tiling, alignment, vias and power straps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={'': '.'},
    packages=setuptools.find_packages(include=['tessera', 'tessera.*']),
    package_data={'tessera.pdk': ['data/*.yaml']},
    python_requires='>=3.10',
    install_requires = [
        'numpy',
        'pyyaml',
        'shapely>=2.0',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
