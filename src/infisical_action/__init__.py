"""
Infisical secrets export for GitHub Actions and the command line.
"""
from invoke import Collection

from . import tasks

__version__ = "1.0.0"

# `invoke export` / `invoke cleanup`
namespace = Collection.from_module(tasks)
