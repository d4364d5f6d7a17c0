#!/usr/bin/env python

from setuptools import setup, find_packages

setup(name="gradeaccess",
      version="2026.1",
      description="Access policy for grading actions",
      long_description=open("README.rst", "rt").read(),

      author="gradeaccess contributors",
      license="MIT",
      python_requires=">=3.11",
      packages=find_packages(exclude=["tests", "tests.*"]),
      install_requires=[
          "django>=4.2",
          "pyyaml",
          "pydantic>=2",
          ],
      extras_require={
          "test": [
              "pytest",
              "factory_boy",
              ],
          },
      )
