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

from libcrcengine.util import *

import pytest

def test_bitreverse():
	assert bitreverse(0x01, 8) == 0x80
	assert bitreverse(0xF0, 8) == 0x0F
	assert bitreverse(0x8005, 16) == 0xA001
	assert bitreverse(0x04C11DB7, 32) == 0xEDB88320
	assert bitreverse(0x864CFB, 24) == 0xDF3261

def test_bitreverse_ignores_high_bits():
	assert bitreverse(0x1FF, 8) == 0xFF
	assert bitreverse(0x10000, 16) == 0

def test_widthMask():
	assert widthMask(8) == 0xFF
	assert widthMask(24) == 0xFFFFFF
	assert widthMask(32) == 0xFFFFFFFF

@pytest.mark.parametrize("polyString", [
	"x^16 + x^15 + x^2 + 1",
	"X^16+X^15+X^2+1",
	"0x8005",
	"0x18005",
	"32773",
])
def test_poly2int(polyString):
	assert poly2int(polyString, 16) == 0x8005

def test_poly2int_shift_right():
	assert poly2int("x^16 + x^15 + x^2 + 1", 16, shiftRight=True) == 0xA001
	assert poly2int("x^8 + x^2 + x + 1", 8) == 0x07

@pytest.mark.parametrize("polyString", [
	"x^a + 1",
	"foo",
	"0xZZ",
	"x^16 + y",
])
def test_poly2int_invalid(polyString):
	with pytest.raises(ValueError):
		poly2int(polyString, 16)

def test_int2poly():
	assert int2poly(0x8005, 16) == "x^16 + x^15 + x^2 + 1"
	assert int2poly(0x07, 8) == "x^8 + x^2 + x + 1"
	assert int2poly(0xA001, 16, shiftRight=True) == "x^16 + x^15 + x^2 + 1"
	assert poly2int(int2poly(0x04C11DB7, 32), 32) == 0x04C11DB7

DATA = b"123456789"

@pytest.mark.parametrize("start, end, expected", [
	(1, -1, b"123456789"),
	(3, -1, b"3456789"),
	(2, 4, b"234"),
	(-3, -1, b"789"),
	(1, -2, b"12345678"),
	(5, 5, b"5"),
	# Positions before the start are clamped.
	(0, -1, b"123456789"),
	(-100, 2, b"12"),
	# Positions behind the end are clamped.
	(8, 100, b"89"),
	# Empty and inverted ranges.
	(5, 2, b""),
	(20, -1, b""),
	(1, 0, b""),
	(1, -100, b""),
])
def test_substring(start, end, expected):
	assert substring(DATA, start, end) == expected

def test_substring_defaults():
	assert substring(DATA) == DATA
	assert substring(DATA, 4) == b"456789"

def test_substring_empty_data():
	assert substring(b"") == b""
	assert substring(b"", -1, 1) == b""

def test_substring_keeps_type():
	assert isinstance(substring(bytearray(DATA), 2, 3), bytearray)
