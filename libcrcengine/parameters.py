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

from dataclasses import dataclass, replace
from libcrcengine.util import *

__all__ = [
	"CRC_WIDTHS",
	"CRC_PARAMETERS",
	"CrcParameters",
]

CRC_WIDTHS = (8, 16, 24, 32)

@dataclass(frozen=True)
class CrcParameters(object):
	"""CRC algorithm parameterization.
	The field names correspond to the catalogue attributes
	Width, Poly, Init, XorOut, RefIn and RefOut.
	"""
	width: int
	polynomial: int
	initial: int = 0
	finalXor: int = 0
	reflectInput: bool = False
	reflectOutput: bool = False

	def isValidWidth(self):
		return (isinstance(self.width, int) and
			not isinstance(self.width, bool) and
			self.width in CRC_WIDTHS)

	def masked(self):
		"""Return a copy with all numeric parameters truncated to width bits.
		Out of range values are not an error.
		"""
		mask = widthMask(self.width)
		return replace(self,
			       polynomial=self.polynomial & mask,
			       initial=self.initial & mask,
			       finalXor=self.finalXor & mask,
			       reflectInput=bool(self.reflectInput),
			       reflectOutput=bool(self.reflectOutput))

	def describe(self):
		return (f"width={self.width}, "
			f"poly=0x{self.polynomial:X}, "
			f"init=0x{self.initial:X}, "
			f"xor=0x{self.finalXor:X}, "
			f"refIn={int(bool(self.reflectInput))}, "
			f"refOut={int(bool(self.reflectOutput))}")

CRC_PARAMETERS = {
	"crc16" : CrcParameters(
		width		= 16,
		polynomial	= 0x8005,
		initial		= 0x0000,
		finalXor	= 0x0000,
		reflectInput	= True,
		reflectOutput	= True,
	),
	"ccitt" : CrcParameters(
		width		= 16,
		polynomial	= 0x1021,
		initial		= 0xFFFF,
		finalXor	= 0x0000,
		reflectInput	= False,
		reflectOutput	= False,
	),
	"xmodem" : CrcParameters(
		width		= 16,
		polynomial	= 0x8408,
		initial		= 0x0000,
		finalXor	= 0x0000,
		reflectInput	= True,
		reflectOutput	= True,
	),
	"crc32" : CrcParameters(
		width		= 32,
		polynomial	= 0x04C11DB7,
		initial		= 0xFFFFFFFF,
		finalXor	= 0xFFFFFFFF,
		reflectInput	= True,
		reflectOutput	= True,
	),
}
