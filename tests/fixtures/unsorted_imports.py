"""Fixture module for import ordering tests."""
from __future__ import annotations

import sys
import os

import requests
from .local import thing


def main():
    return os, sys, requests, thing
