from setuptools import setup, find_packages

install_packages = [ "scipy",
                     "numpy",
                     "bidict",
                     "pulp" ]

setup(
    name = 'milpkit',
    version = '0.1',
    packages = find_packages(exclude=["examples"]),
    scripts=['bin/milpkit'],
    python_requires = '>=3.8',
    install_requires = install_packages,
    extras_require = { "test" : ["pytest"] }
)
