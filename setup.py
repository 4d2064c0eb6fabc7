#!/usr/bin/env python3

from setuptools import setup, find_packages

requires = [
    "discord.py (>=2.0,<3.0)",
    "sqlalchemy (>=1.4,<3.0)",
]

setup(name='Calc-bot',
      version='1.0.0',
      description='Discord bot for evaluating arithmetic expressions',
      author='BHodges',
      install_requires=requires,
      scripts=['calc-bot.py'],
      packages=find_packages(exclude=['tests']))
