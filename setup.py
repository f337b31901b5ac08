from setuptools import setup, find_packages

# Doing it as suggested here:
# https://packaging.python.org/guides/single-sourcing-package-version/
# (number 3)

version = {}
with open("mcstat/version.py") as fp:
    exec(fp.read(), version)

with open("README.md") as f:
    readme = f.read()

setup(
    name="mcstat",
    version=version["__version__"],
    description=("Monte Carlo for statistical mechanics. "
                 "Metropolis and Wang-Landau engines for arbitrary "
                 "configurations."),
    long_description=readme,
    long_description_content_type='text/markdown',
    author="mcstat developers",
    packages=find_packages(exclude=("test", "docs", "examples", "install")),
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=open('requirements.txt').read().splitlines(),
    extras_require={
        "mpi": ["mpi4py"],
        "plot": ["matplotlib"],
        "test": ["pytest"],
    },
)
