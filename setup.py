from setuptools import setup, find_packages


install_requires = [
    'PyYAML>=3.0',
    'jsonschema>=4',
    'Pillow>=9',
    'requests',
]


def long_description():
    return open('README.md').read()


setup(
    name='TileView',
    version="0.9.0",
    description='Tile addressing and cache-first tile retrieval for map viewers',
    long_description=long_description(),
    long_description_content_type='text/markdown',
    license='Apache Software License 2.0',
    packages=find_packages(include=['tileview', 'tileview.*']),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'tileview-util = tileview.script.util:main',
        ],
    },
    package_data={'': ['*.json']},
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.9',
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    zip_safe=False
)
