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

from libcrcengine.engine import *
from libcrcengine.reference import *
from libcrcengine.util import *
from libcrcengine.version import *

__all__ = [
	"CrcTableGen",
]

class CrcTableGen(object):
	"""Table driven CRC algorithm code generator.

	The generated code has the same three steps as an engine:
	an initial register value, an update function that folds
	bytes into the register and a final function that turns the
	register into the checksum.
	"""

	TABLE_COLUMNS = 8

	def __init__(self, parameters):
		if not parameters.isValidWidth():
			raise InvalidWidthError(parameters.width)
		self.__params = parameters.masked()
		nrCrcBits = self.__params.width
		# A register in reflected bit order needs no bit reversal at all.
		self.__reflected = (self.__params.reflectInput and
				    self.__params.reflectOutput)
		if self.__reflected:
			self.__init = bitreverse(self.__params.initial, nrCrcBits)
			self.__table = CrcReference.table(
				polynomial=bitreverse(self.__params.polynomial, nrCrcBits),
				nrCrcBits=nrCrcBits,
				shiftRight=True)
		else:
			self.__init = self.__params.initial
			self.__table = CrcReference.table(
				polynomial=self.__params.polynomial,
				nrCrcBits=nrCrcBits,
				shiftRight=False)

	@property
	def reflected(self):
		return self.__reflected

	@property
	def table(self):
		return self.__table

	def __header(self, language):
		return f"""\
THIS IS GENERATED {language.upper()} CODE.
Generated by crcengine {VERSION_STRING}

This code is Public Domain.
Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR ANY
SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES WHATSOEVER
RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN ACTION OF CONTRACT,
NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF OR IN CONNECTION WITH THE
USE OR PERFORMANCE OF THIS SOFTWARE."""

	def __algDescription(self):
		p = self.__params
		pstr = int2poly(p.polynomial, p.width)
		shift = ("right (reflected register)" if self.__reflected
			 else "left (direct register)")
		return (f"CRC polynomial coefficients: {pstr}\n"
			f"                             0x{p.polynomial:X} (hex)\n"
			f"CRC width:                   {p.width} bits\n"
			f"Initial value:               0x{p.initial:X}\n"
			f"Final XOR value:             0x{p.finalXor:X}\n"
			f"Reflect input:               {int(p.reflectInput)}\n"
			f"Reflect output:              {int(p.reflectOutput)}\n"
			f"Register shift direction:    {shift}\n")

	def __hex(self, value, nrBits, suffix=""):
		return f"0x{value:0{nrBits // 4}X}{suffix}"

	def __tableLines(self, values, nrBits, indent, suffix=""):
		cols = self.TABLE_COLUMNS
		return [ indent + ", ".join(self.__hex(v, nrBits, suffix)
					    for v in values[i : i + cols]) + ","
			 for i in range(0, len(values), cols) ]

	def __needReversedBytes(self):
		return not self.__reflected and self.__params.reflectInput

	def genPython(self, funcName="crc"):
		p = self.__params
		nrCrcBits = p.width
		mask = self.__hex(widthMask(nrCrcBits), nrCrcBits)
		ret = []
		ret.append("# vim: ts=4 sw=4 expandtab")
		ret.append("")
		ret.extend("# " + l for l in self.__header("Python").splitlines())
		ret.append("")
		ret.extend("# " + l for l in self.__algDescription().splitlines())
		ret.append("")
		ret.append(f"{funcName}_TABLE = (")
		ret.extend(self.__tableLines(self.__table, nrCrcBits, "    "))
		ret.append(")")
		ret.append("")
		if self.__needReversedBytes():
			ret.append(f"{funcName}_REVERSED = (")
			ret.extend(self.__tableLines([ bitreverse(i, 8) for i in range(256) ],
						     8, "    "))
			ret.append(")")
			ret.append("")
		ret.append(f"{funcName}_INIT = {self.__hex(self.__init, nrCrcBits)}")
		ret.append("")
		ret.append(f"def {funcName}_update(crc, data):")
		ret.append(f"    table = {funcName}_TABLE")
		ret.append(f"    for b in data:")
		if self.__reflected:
			ret.append(f"        crc = (crc >> 8) ^ table[(crc ^ b) & 0xFF]")
		else:
			if p.reflectInput:
				ret.append(f"        b = {funcName}_REVERSED[b]")
			ret.append(f"        crc = ((crc << 8) ^ table[((crc >> {nrCrcBits - 8}) ^ b) & 0xFF]) & {mask}")
		ret.append(f"    return crc")
		ret.append("")
		ret.append(f"def {funcName}_final(crc):")
		if not self.__reflected and p.reflectOutput:
			ret.append(f"    ret = 0")
			ret.append(f"    for _ in range({nrCrcBits}):")
			ret.append(f"        ret = (ret << 1) | (crc & 1)")
			ret.append(f"        crc >>= 1")
			ret.append(f"    crc = ret")
		ret.append(f"    return (crc ^ {self.__hex(p.finalXor, nrCrcBits)}) & {mask}")
		return "\n".join(ret)

	def genC(self,
		 funcName="crc",
		 static=False,
		 inline=False,
		 declOnly=False,
		 includeGuards=True,
		 includes=True):
		p = self.__params
		nrCrcBits = p.width
		cBits = 8 if nrCrcBits <= 8 else (16 if nrCrcBits <= 16 else 32)
		cCrcType = f"uint{cBits}_t"
		mask = self.__hex(widthMask(nrCrcBits), nrCrcBits, "u")
		ret = []
		ret.append("// vim: ts=4 sw=4 expandtab")
		ret.append("")
		ret.extend("// " + l for l in self.__header("C").splitlines())
		ret.append("")
		if includeGuards:
			ret.append(f"#ifndef {funcName.upper()}_H_")
			ret.append(f"#define {funcName.upper()}_H_")
		if includes:
			ret.append("")
			ret.append("#include <stddef.h>")
			ret.append("#include <stdint.h>")
		ret.append("")
		ret.extend("// " + l for l in self.__algDescription().splitlines())
		ret.append("")
		extern = "extern " if declOnly else ""
		static = "static " if static and not declOnly else ""
		inline = "inline " if inline and not declOnly else ""
		end = ";" if declOnly else ""
		prefix = f"{extern}{static}{inline}{cCrcType}"
		if not declOnly:
			ret.append(f"static const {cCrcType} {funcName}_table[256] = {{")
			ret.extend(self.__tableLines(self.__table, nrCrcBits, "    ", "u"))
			ret.append("};")
			ret.append("")
			if self.__needReversedBytes():
				ret.append(f"static const uint8_t {funcName}_reversed[256] = {{")
				ret.extend(self.__tableLines([ bitreverse(i, 8) for i in range(256) ],
							     8, "    ", "u"))
				ret.append("};")
				ret.append("")
		ret.append(f"{prefix} {funcName}_init(void){end}")
		if not declOnly:
			ret.append("{")
			ret.append(f"    return {self.__hex(self.__init, nrCrcBits, 'u')};")
			ret.append("}")
			ret.append("")
		ret.append(f"{prefix} {funcName}_update({cCrcType} crc, const uint8_t *data, size_t size){end}")
		if not declOnly:
			ret.append("{")
			ret.append("    while (size--) {")
			if self.__reflected:
				ret.append(f"        crc = ({cCrcType})((crc >> 8) ^ {funcName}_table[(crc ^ *data++) & 0xFFu]);")
			else:
				inByte = f"{funcName}_reversed[*data++]" if p.reflectInput else "*data++"
				ret.append(f"        crc = ({cCrcType})(((crc << 8) ^ "
					   f"{funcName}_table[((crc >> {nrCrcBits - 8}) ^ {inByte}) & 0xFFu]) & {mask});")
			ret.append("    }")
			ret.append("    return crc;")
			ret.append("}")
			ret.append("")
		ret.append(f"{prefix} {funcName}_final({cCrcType} crc){end}")
		if not declOnly:
			ret.append("{")
			if not self.__reflected and p.reflectOutput:
				ret.append(f"    {cCrcType} ret = 0u;")
				ret.append("    unsigned int i;")
				ret.append(f"    for (i = 0u; i < {nrCrcBits}u; i++) {{")
				ret.append(f"        ret = ({cCrcType})((ret << 1) | (crc & 1u));")
				ret.append("        crc >>= 1;")
				ret.append("    }")
				ret.append("    crc = ret;")
			ret.append(f"    return ({cCrcType})((crc ^ {self.__hex(p.finalXor, nrCrcBits, 'u')}) & {mask});")
			ret.append("}")
		if includeGuards:
			ret.append("")
			ret.append(f"#endif /* {funcName.upper()}_H_ */")
		return "\n".join(ret)
