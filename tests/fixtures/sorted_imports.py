"""Fixture module for import ordering tests."""
from __future__ import annotations

import os
import sys

import requests

from .local import thing


def main():
    return os, sys, requests, thing
