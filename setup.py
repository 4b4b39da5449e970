#!/usr/bin/env python3

import os
basedir = os.path.abspath(os.path.dirname(__file__))

from libcrcengine.version import VERSION_STRING
from setuptools import setup

with open(os.path.join(basedir, "README.rst"), "rb") as fd:
	readmeText = fd.read().decode("UTF-8")

setup(
	name		= "crcengine",
	version		= VERSION_STRING,
	description	= "Configurable CRC computation engine with table optimized presets",
	license		= "GNU General Public License v2 or later",
	author		= "Michael Büsch",
	author_email	= "m@bues.ch",
	python_requires = ">=3.7",
	scripts		= [
		"crcengine",
	],
	packages	= [
		"libcrcengine",
	],
	extras_require	= {
		"test" : [
			"pytest",
			"cffi",
		],
	},
	keywords	= "CRC checksum CRC16 CCITT XMODEM CRC32 codegenerator",
	classifiers	= [
		"Development Status :: 5 - Production/Stable",
		"Environment :: Console",
		"Intended Audience :: Developers",
		"Intended Audience :: Information Technology",
		"Intended Audience :: Telecommunications Industry",
		"License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
		"Operating System :: OS Independent",
		"Programming Language :: Python",
		"Programming Language :: Python :: 3",
		"Topic :: Software Development",
		"Topic :: Software Development :: Code Generators",
		"Topic :: Software Development :: Libraries",
		"Topic :: Utilities",
	],
	long_description=readmeText,
	long_description_content_type="text/x-rst",
)

# vim: ts=8 sw=8 noexpandtab
