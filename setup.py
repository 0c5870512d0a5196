import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="pyroots",
    version="0.1.0",
    author="pyroots contributors",
    description="Certified root finding for scalar functions and "
                "polynomials with multiple roots.",
    include_package_data=True,  # <<< Note!
    install_requires=[
        'numpy>=2.0', 'scipy>=1.15', 'mpmath'
    ],
    extras_require={
        'test': ['pytest'],
    },
    keywords='root finding bisection newton polynomial multiplicity',
    long_description=long_description,
    long_description_content_type="text/markdown",
    setup_requires=["numpy"],
    packages=setuptools.find_packages(include=['pyroots', 'pyroots.*']),
    python_requires='>=3.10',
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Topic :: Scientific/Engineering :: Mathematics"
    ]
)
