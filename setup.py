"""
tagcore setup: tagcore is the common core of a family of statistical
taggers and labelers over dependency trees
"""

from setuptools import setup, find_packages
import glob
import os

REQS = [
    'frozendict',
    'numpy',
    'tabulate',
    'nltk >= 3.0.0',
]


setup(name='tagcore',
      version='0.1',
      packages=find_packages(),
      package_data={'tagcore': ['data/*.xml']},
      scripts=[f for f in glob.glob('scripts/*') if not os.path.isdir(f)],
      install_requires=REQS,
      extras_require={'test': ['pytest']})
