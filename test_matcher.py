#!/usr/bin/env python3
"""
test_matcher.py - Package/service filters and the service matcher

Tests:
1. PackageFilter - textual prefix semantics
2. ServiceFilter - unanchored search, case handling, bad patterns
3. match_services - walking, sorting, multiplicity, error aggregation
"""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from grpc_transcoder import (
    DescriptorSet,
    FileEntry,
    MatchResult,
    PackageFilter,
    PatternCompileError,
    ServiceEntry,
    ServiceFilter,
    match_services,
)


def make_set(*files) -> DescriptorSet:
    """Build a DescriptorSet from (package, [service, ...]) pairs."""
    return DescriptorSet(files=tuple(
        FileEntry(name=f"file{i}.proto", package=package,
                  services=tuple(ServiceEntry(s) for s in services))
        for i, (package, services) in enumerate(files)
    ))


SAMPLE = make_set(
    ("acme.foo.v1", ["EchoService", "OtherService"]),
    ("acme.bar", ["EchoService", "HttpBin"]),
    ("acme.foo.v1", ["EchoService"]),
    ("", ["RootService"]),
)


class TestPackageFilter(unittest.TestCase):

    def test_empty_matches_everything(self):
        f = PackageFilter()
        self.assertTrue(f.matches("acme.foo"))
        self.assertTrue(f.matches(""))

    def test_textual_prefix(self):
        f = PackageFilter.from_prefixes(["acme.ex"])
        self.assertTrue(f.matches("acme.example"))
        self.assertTrue(f.matches("acme.ex"))
        self.assertFalse(f.matches("acme"))
        self.assertFalse(f.matches("other.acme.ex"))

    def test_any_prefix(self):
        f = PackageFilter.from_prefixes(["acme.foo", "corp"])
        self.assertTrue(f.matches("corp.billing"))
        self.assertTrue(f.matches("acme.foo.v1"))
        self.assertFalse(f.matches("acme.bar"))


class TestServiceFilter(unittest.TestCase):

    def test_empty_matches_everything(self):
        f = ServiceFilter.compile([])
        self.assertTrue(f.matches("Anything"))
        self.assertIsNone(f.error)

    def test_search_is_unanchored(self):
        f = ServiceFilter.compile(["Service"], ignore_case=False)
        self.assertTrue(f.matches("EchoService"))
        self.assertTrue(f.matches("ServiceEcho"))
        self.assertFalse(f.matches("HttpBin"))

    def test_anchors_are_honoured(self):
        f = ServiceFilter.compile(["^Echo$"], ignore_case=False)
        self.assertTrue(f.matches("Echo"))
        self.assertFalse(f.matches("EchoService"))

    def test_ignore_case_default(self):
        f = ServiceFilter.compile(["echo.*"])
        self.assertTrue(f.matches("EchoService"))

    def test_case_sensitive(self):
        f = ServiceFilter.compile(["echo.*"], ignore_case=False)
        self.assertFalse(f.matches("EchoService"))
        self.assertTrue(f.matches("echoService"))

    def test_invalid_patterns_are_collected(self):
        f = ServiceFilter.compile(["[", "echo.*", "(unclosed"])
        self.assertIsInstance(f.error, PatternCompileError)
        self.assertEqual(f.error.patterns, ["[", "(unclosed"])
        self.assertEqual(len(f.error), 2)
        self.assertEqual(len(f.compiled), 1)
        self.assertTrue(f.matches("EchoService"))
        self.assertFalse(f.matches("OtherService"))
        self.assertIn("2 service patterns failed to compile", str(f.error))

    def test_all_invalid_matches_nothing(self):
        f = ServiceFilter.compile(["["])
        self.assertFalse(f.matches("EchoService"))
        self.assertEqual(len(f.error), 1)

    def test_overflowing_repeat_is_collected(self):
        f = ServiceFilter.compile(["a{99999999999}", "echo"])
        self.assertEqual(f.error.patterns, ["a{99999999999}"])
        self.assertIsInstance(f.error.failures[0][1], OverflowError)
        self.assertTrue(f.matches("EchoService"))

    def test_deep_nesting_is_collected(self):
        deep = "(" * 100_000 + "a" + ")" * 100_000
        f = ServiceFilter.compile([deep, "echo"])
        self.assertEqual(len(f.error), 1)
        self.assertTrue(f.matches("EchoService"))


class TestMatchServices(unittest.TestCase):

    def test_empty_descriptor_set(self):
        result = match_services(DescriptorSet(), [], [])
        self.assertIsInstance(result, MatchResult)
        self.assertEqual(result.services, [])
        self.assertIsNone(result.error)
        self.assertTrue(result.ok)

    def test_no_filters_returns_everything_with_duplicates(self):
        result = match_services(SAMPLE)
        self.assertEqual(result.services, [
            ".RootService",
            "acme.bar.EchoService",
            "acme.bar.HttpBin",
            "acme.foo.v1.EchoService",
            "acme.foo.v1.EchoService",
            "acme.foo.v1.OtherService",
        ])
        self.assertEqual(len(result.services), SAMPLE.service_count)

    def test_package_exclusion(self):
        ds = make_set(
            ("acme.foo.v1", ["EchoService"]),
            ("acme.bar", ["BarService"]),
        )
        result = match_services(ds, packages=["acme.foo"])
        self.assertEqual(result.services, ["acme.foo.v1.EchoService"])

    def test_package_filter_skips_whole_file(self):
        result = match_services(SAMPLE, packages=["acme.bar"], services=["Echo", "Other"])
        self.assertEqual(result.services, ["acme.bar.EchoService"])

    def test_results_respect_prefixes(self):
        prefixes = ["acme.f"]
        result = match_services(SAMPLE, packages=prefixes)
        self.assertEqual(len(result.services), 3)
        for name in result.services:
            package = name.rsplit(".", 1)[0]
            self.assertTrue(any(package.startswith(p) for p in prefixes))

    def test_results_match_patterns(self):
        patterns = ["^Http", "Other"]
        result = match_services(SAMPLE, services=patterns, ignore_case=False)
        self.assertEqual(result.services, ["acme.bar.HttpBin", "acme.foo.v1.OtherService"])

    def test_overflowing_pattern_does_not_abort(self):
        ds = make_set(("acme.echo", ["EchoService", "OtherService"]))
        result = match_services(ds, services=["a{99999999999}", "echo"])
        self.assertEqual(result.services, ["acme.echo.EchoService"])
        self.assertEqual(result.error.patterns, ["a{99999999999}"])

    def test_mixed_validity_patterns(self):
        ds = make_set(("acme.echo", ["EchoService", "OtherService"]))
        result = match_services(ds, services=["[", "echo.*"])
        self.assertEqual(result.services, ["acme.echo.EchoService"])
        self.assertFalse(result.ok)
        self.assertEqual(len(result.error), 1)
        self.assertEqual(result.error.patterns, ["["])
        self.assertEqual(result.to_dict(), {
            "services": ["acme.echo.EchoService"],
            "pattern_errors": ["["],
        })

    def test_empty_package_qualified_name(self):
        result = match_services(make_set(("", ["Lonely"])))
        self.assertEqual(result.services, [".Lonely"])

    def test_idempotent_and_sorted(self):
        first = match_services(SAMPLE, packages=["acme"], services=["e"])
        second = match_services(SAMPLE, packages=["acme"], services=["e"])
        self.assertEqual(first.services, second.services)
        self.assertEqual(first.services, sorted(first.services))

    def test_inputs_not_mutated(self):
        packages = ["acme.foo"]
        services = ["echo"]
        match_services(SAMPLE, packages, services)
        self.assertEqual(packages, ["acme.foo"])
        self.assertEqual(services, ["echo"])

    def test_generator_inputs(self):
        result = match_services(SAMPLE, (p for p in ["acme.bar"]), (s for s in ["Http"]))
        self.assertEqual(result.services, ["acme.bar.HttpBin"])


if __name__ == '__main__':
    unittest.main(verbosity=2)
