#!/usr/bin/env python

import os

from setuptools import (find_packages, setup)

here = os.path.abspath(os.path.dirname(__file__))

# To update the package version number, edit vmctorch/__version__.py
version = {}
with open(os.path.join(here, 'vmctorch', '__version__.py')) as f:
    exec(f.read(), version)

with open('README.md') as readme_file:
    readme = readme_file.read()

setup(
    name='vmctorch',
    version=version['__version__'],
    description="Pytorch Implementation of Variational Monte Carlo for trapped bosons",
    long_description=readme + '\n\n',
    long_description_content_type='text/markdown',
    author=["Nicolas Renaud", "Felipe Zapata"],
    author_email='n.renaud@esciencecenter.nl',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_dir={'vmctorch': 'vmctorch'},
    include_package_data=True,
    license="Apache Software License 2.0",
    zip_safe=False,
    keywords='vmctorch',
    scripts=['bin/vmctorch'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Topic :: Scientific/Engineering :: Physics'
    ],
    test_suite='tests',
    install_requires=['matplotlib', 'numpy', 'argparse', 'h5py',
                      'scipy', 'tqdm', 'torch', 'twiggy'],

    extras_require={
        'test': ['pytest', 'pytest-runner',
                 'coverage', 'pycodestyle'],
    }
)
