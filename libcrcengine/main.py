# vim: ts=8 sw=8 noexpandtab
#
#   CRC computation engine
#
#   Copyright (c) 2019-2024 Michael Buesch <m@bues.ch>
#
#   This program is free software; you can redistribute it and/or modify
#   it under the terms of the GNU General Public License as published by
#   the Free Software Foundation; either version 2 of the License, or
#   (at your option) any later version.
#
#   This program is distributed in the hope that it will be useful,
#   but WITHOUT ANY WARRANTY; without even the implied warranty of
#   MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#   GNU General Public License for more details.
#
#   You should have received a copy of the GNU General Public License along
#   with this program; if not, write to the Free Software Foundation, Inc.,
#   51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.
#

from libcrcengine import *

from dataclasses import replace
import sys
import argparse

__all__ = [
	"main",
]

def main(argv=None):
	try:
		def argInt(string):
			if string.startswith("0x"):
				return int(string[2:], 16)
			return int(string)
		p = argparse.ArgumentParser(
			description="Configurable CRC computation engine.")
		g = p.add_mutually_exclusive_group(required=True)
		g.add_argument("-s", "--string", type=str, help="Calculate the checksum of a UTF-8 string")
		g.add_argument("-x", "--hex", type=str, help="Calculate the checksum of hex encoded bytes")
		g.add_argument("-p", "--python", action="store_true", help="Generate table driven Python code")
		g.add_argument("-c", "--c", action="store_true", help="Generate table driven C code")
		g.add_argument("-T", "--polynomial-convert", type=str, help="Convert a polynomial from string to int or vice versa.")
		g.add_argument("-t", "--test", action="store_true", help="Run self tests for the specified algorithm")
		p.add_argument("-a", "--algorithm", type=str,
			       choices=CRC_PARAMETERS.keys(), default="crc32",
			       help="Select the CRC algorithm. "
				    "Individual algorithm parameters (e.g. polynomial) can be overridden with the options below.")
		p.add_argument("-B", "--nr-crc-bits", type=argInt, help="Number of CRC bits (8, 16, 24 or 32).")
		p.add_argument("-P", "--polynomial", type=str, help="CRC polynomial")
		p.add_argument("-i", "--initial", type=argInt, help="Initial CRC register value")
		p.add_argument("-X", "--xor", type=argInt, help="Final XOR value")
		g = p.add_mutually_exclusive_group()
		g.add_argument("-r", "--reflect-input", action="store_true", help="Reflect the input bytes")
		g.add_argument("--no-reflect-input", action="store_true", help="Do not reflect the input bytes")
		g = p.add_mutually_exclusive_group()
		g.add_argument("-R", "--reflect-output", action="store_true", help="Reflect the final register")
		g.add_argument("--no-reflect-output", action="store_true", help="Do not reflect the final register")
		p.add_argument("--start", type=int, default=1,
			       help="First byte to process (1-based, negative counts from the end)")
		p.add_argument("--end", type=int, default=-1,
			       help="Last byte to process (1-based, negative counts from the end)")
		p.add_argument("-n", "--name", type=str, default="crc", help="Generated function name prefix")
		p.add_argument("-S", "--static", action="store_true", help="Generate static C functions")
		p.add_argument("-I", "--inline", action="store_true", help="Generate inline C functions")
		p.add_argument("--no-c-test", action="store_true", help="Do not compile and test the generated C code in -t|--test")
		args = p.parse_args(argv)

		if (args.nr_crc_bits is not None and
		    args.nr_crc_bits not in CRC_WIDTHS):
			raise InvalidWidthError(args.nr_crc_bits)

		if args.polynomial_convert is not None:
			if args.nr_crc_bits is None:
				raise CrcError("-B|--nr-crc-bits is required for -T|--polynomial-convert")
			try:
				if "^" in args.polynomial_convert.lower():
					print(f"0x{poly2int(args.polynomial_convert, args.nr_crc_bits):X}")
				else:
					print(int2poly(int(args.polynomial_convert, 0),
						       args.nr_crc_bits))
			except ValueError as e:
				raise CrcError("-T|--polynomial-convert error: " + str(e))
			return 0

		overrides = {}
		if args.nr_crc_bits is not None:
			overrides["width"] = args.nr_crc_bits
		if args.initial is not None:
			overrides["initial"] = args.initial
		if args.xor is not None:
			overrides["finalXor"] = args.xor
		if args.reflect_input or args.no_reflect_input:
			overrides["reflectInput"] = args.reflect_input
		if args.reflect_output or args.no_reflect_output:
			overrides["reflectOutput"] = args.reflect_output
		if args.polynomial is not None:
			nrCrcBits = overrides.get("width", CRC_PARAMETERS[args.algorithm].width)
			try:
				if "^" in args.polynomial:
					overrides["polynomial"] = poly2int(args.polynomial, nrCrcBits)
				else:
					overrides["polynomial"] = argInt(args.polynomial)
			except ValueError as e:
				raise CrcError("Polynomial error: " + str(e))

		crcParameters = replace(CRC_PARAMETERS[args.algorithm], **overrides)
		name = None if overrides else args.algorithm

		if args.test:
			CrcSelfTest(crcParameters, name=name).runTests(testC=not args.no_c_test)
		elif args.python:
			print(CrcTableGen(crcParameters).genPython(funcName=args.name))
		elif args.c:
			print(CrcTableGen(crcParameters).genC(funcName=args.name,
							      static=args.static,
							      inline=args.inline))
		else:
			if name is None:
				crc = construct_generic(crcParameters)
			else:
				crc = construct_preset(name)
			if args.hex is not None:
				try:
					data = bytes.fromhex(args.hex)
				except ValueError as e:
					raise CrcError("Hex data error: " + str(e))
			else:
				data = args.string.encode("UTF-8")
			checksum = crc(data, args.start, args.end)
			print(f"0x{checksum:0{crc.width // 4}X}")
		return 0
	except CrcError as e:
		print("ERROR: " + str(e), file=sys.stderr)
	return 1
