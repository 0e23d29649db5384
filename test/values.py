"""
Values module behavioral tests (value types, numeric parsing, casting).

Scope
- Validate tonumber() on decimal, radix, exponent and Infinity literals.
- Validate ValueType.resolve()/accepts() on names and python types.
- Validate the boolean/string/number casts, including NotANumberError.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from argot import ValueType, tonumber
from argot.faults import FaultCode, NotANumberError


class TestToNumber(TestCase):
    """Behavioral tests for tonumber()."""

    def testIntegralLiteralStaysInt(self):
        self.assertEqual(tonumber("42"), 42)
        self.assertIsInstance(tonumber("42"), int)
        self.assertEqual(tonumber("-7"), -7)

    def testFractionalLiteralIsFloat(self):
        self.assertEqual(tonumber("2.5"), 2.5)
        self.assertEqual(tonumber(".5"), 0.5)
        self.assertIsInstance(tonumber("3."), float)

    def testExponentLiteral(self):
        self.assertEqual(tonumber("1e3"), 1000.0)
        self.assertEqual(tonumber("2.5E-1"), 0.25)

    def testSurroundingWhitespaceIgnored(self):
        self.assertEqual(tonumber("  7 \n"), 7)

    def testEmptyTextIsZero(self):
        self.assertEqual(tonumber(""), 0)
        self.assertEqual(tonumber("   "), 0)

    def testRadixLiterals(self):
        self.assertEqual(tonumber("0x1f"), 31)
        self.assertEqual(tonumber("0o17"), 15)
        self.assertEqual(tonumber("0b101"), 5)

    def testInfinity(self):
        self.assertEqual(tonumber("Infinity"), math.inf)
        self.assertEqual(tonumber("-Infinity"), -math.inf)

    def testOversizedIntegralLiteral(self):
        self.assertEqual(tonumber("1" * 5000), math.inf)
        self.assertEqual(tonumber("-" + "9" * 5000), -math.inf)
        self.assertEqual(tonumber("1" * 100), int("1" * 100))

    def testNotANumber(self):
        for text in ("abc", "1x", "1.2.3", "0x", "infinity", "--1"):
            with self.subTest(text=text):
                self.assertTrue(math.isnan(tonumber(text)))

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            tonumber(5)


class TestValueType(TestCase):
    """Behavioral tests for ValueType resolution and default checks."""

    def testResolveByName(self):
        self.assertIs(ValueType.resolve("number"), ValueType.NUMBER)
        self.assertIs(ValueType.resolve(" Boolean "), ValueType.BOOLEAN)
        self.assertIs(ValueType.resolve(ValueType.STRING), ValueType.STRING)

    def testResolveByPythonType(self):
        self.assertIs(ValueType.resolve(bool), ValueType.BOOLEAN)
        self.assertIs(ValueType.resolve(str), ValueType.STRING)
        self.assertIs(ValueType.resolve(int), ValueType.NUMBER)
        self.assertIs(ValueType.resolve(float), ValueType.NUMBER)

    def testResolveUnknownName(self):
        with self.assertRaises(ValueError):
            ValueType.resolve("list")

    def testResolveBadType(self):
        with self.assertRaises(TypeError):
            ValueType.resolve(list)
        with self.assertRaises(TypeError):
            ValueType.resolve(3)

    def testAccepts(self):
        self.assertTrue(ValueType.BOOLEAN.accepts(False))
        self.assertFalse(ValueType.BOOLEAN.accepts(0))
        self.assertTrue(ValueType.STRING.accepts(""))
        self.assertFalse(ValueType.STRING.accepts(None))
        self.assertTrue(ValueType.NUMBER.accepts(0))
        self.assertTrue(ValueType.NUMBER.accepts(2.5))
        self.assertFalse(ValueType.NUMBER.accepts(True))
        self.assertFalse(ValueType.NUMBER.accepts("5"))


class TestCast(TestCase):
    """Behavioral tests for ValueType.cast()."""

    def testBooleanTruthyText(self):
        for text in ("true", "TRUE", "t", "T", "1", "2.5", "0x1"):
            with self.subTest(text=text):
                self.assertIs(ValueType.BOOLEAN.cast(text), True)

    def testBooleanFalsyText(self):
        for text in ("false", "f", "0", "", "-1", "yes", "abc"):
            with self.subTest(text=text):
                self.assertIs(ValueType.BOOLEAN.cast(text), False)

    def testBooleanWhitespaceText(self):
        for text in (" ", "\t\n", "  0  "):
            with self.subTest(text=text):
                self.assertIs(ValueType.BOOLEAN.cast(text), False)
        self.assertIs(ValueType.BOOLEAN.cast(" 1 "), True)

    def testBooleanOversizedText(self):
        self.assertIs(ValueType.BOOLEAN.cast("1" * 5000), True)

    def testNumberOversizedText(self):
        self.assertEqual(ValueType.NUMBER.cast("1" * 5000), math.inf)

    def testBooleanNonText(self):
        self.assertIs(ValueType.BOOLEAN.cast(True), True)
        self.assertIs(ValueType.BOOLEAN.cast(None), False)

    def testStringCast(self):
        self.assertEqual(ValueType.STRING.cast(None), "null")
        self.assertEqual(ValueType.STRING.cast("x"), "x")
        self.assertEqual(ValueType.STRING.cast(""), "")
        self.assertEqual(ValueType.STRING.cast(5), "5")

    def testNumberEmptyIsZero(self):
        for value in (None, "", False, 0):
            with self.subTest(value=value):
                self.assertEqual(ValueType.NUMBER.cast(value), 0)

    def testNumberFromText(self):
        self.assertEqual(ValueType.NUMBER.cast("9"), 9)
        self.assertEqual(ValueType.NUMBER.cast("0.5"), 0.5)
        self.assertEqual(ValueType.NUMBER.cast(True), 1)

    def testNumberPassThrough(self):
        self.assertEqual(ValueType.NUMBER.cast(3), 3)
        self.assertEqual(ValueType.NUMBER.cast(1.5), 1.5)

    def testNumberFailureNamesToken(self):
        with self.assertRaises(NotANumberError) as context:
            ValueType.NUMBER.cast("abc", token="--count=abc", key="count")
        fault = context.exception
        self.assertEqual(fault.options["token"], "--count=abc")
        self.assertEqual(fault.options["value"], "abc")
        self.assertEqual(fault.options["key"], "count")
        self.assertIs(fault.options["code"], FaultCode.NOT_A_NUMBER)
        self.assertIn("--count=abc", fault.message)


if __name__ == "__main__":
    unittest.main()
