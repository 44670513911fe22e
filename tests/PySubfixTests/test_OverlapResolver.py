import unittest

from PySubfix.Helpers.TestCases import BuildBlocks, CreateOptions, LoggedTestCase
from PySubfix.Helpers.Tests import log_input_expected_result
from PySubfix.OverlapResolver import OverlapResolver, ResolvePositions
from PySubfix.PositionTags import POSITION_TAGS
from PySubfix.SubtitleBlock import SubtitleBlock

class TestOverlapResolver(LoggedTestCase):
    def test_TwoOverlappingBlocks(self):
        blocks = BuildBlocks([(0, 4000), (2000, 6000)], ["Hi", "Bye"])
        ResolvePositions(blocks, CreateOptions())

        self.assertLoggedEqual("first tag", POSITION_TAGS[0], blocks[0].assigned_tag)
        self.assertLoggedEqual("second tag", POSITION_TAGS[1], blocks[1].assigned_tag)
        self.assertLoggedEqual("default omitted", "Hi", blocks[0].text)
        self.assertLoggedEqual("second tagged", "{\\an8}Bye", blocks[1].text)

    def test_OverlappingBlocksGetDistinctTags(self):
        timings = [(0, 5000), (1000, 2000), (1500, 7000), (3000, 4000), (4500, 9000), (6000, 6500), (8000, 12000), (8500, 8600)]
        blocks = BuildBlocks(timings)
        ResolvePositions(blocks, CreateOptions())

        for block in blocks:
            self.assertIn(block.assigned_tag, POSITION_TAGS)

        for i, first in enumerate(blocks):
            for second in blocks[i + 1:]:
                if first.Overlaps(second):
                    log_input_expected_result(f"{first.timing} / {second.timing}", "different tags", (first.assigned_tag, second.assigned_tag))
                    self.assertNotEqual(first.assigned_tag, second.assigned_tag)

    def test_SixOverlappingBlocksFallBackToLastTag(self):
        blocks = BuildBlocks([(0, 10000)] * 6)
        resolver = OverlapResolver(CreateOptions())

        with self.assertLogs(level='WARNING'):
            resolver.ResolvePositions(blocks)

        tags = [ block.assigned_tag for block in blocks ]
        self.assertLoggedSequenceEqual("assigned tags", list(POSITION_TAGS) + [POSITION_TAGS[-1]], tags)
        self.assertLoggedEqual("overflow count", 1, resolver.overflow_count)
        self.assertLoggedEqual("sixth block text", "{\\an6}Line 6", blocks[5].text)

    def test_BackToBackBlocksDoNotConflict(self):
        blocks = BuildBlocks([(0, 1000), (1000, 2000), (2000, 3000)])
        ResolvePositions(blocks, CreateOptions())

        tags = [ block.assigned_tag for block in blocks ]
        self.assertLoggedSequenceEqual("tags", [POSITION_TAGS[0]] * 3, tags)

    def test_EndedBlocksAreEvicted(self):
        blocks = BuildBlocks([(0, 5000), (1000, 2000), (3000, 4000)])
        ResolvePositions(blocks, CreateOptions())

        tags = [ block.assigned_tag for block in blocks ]
        self.assertLoggedSequenceEqual("tags", ["\\an2", "\\an8", "\\an8"], tags)

    def test_SweepOrderIsIndependentOfListOrder(self):
        blocks = BuildBlocks([(2000, 6000), (0, 4000)], ["Later", "Earlier"])
        ResolvePositions(blocks, CreateOptions())

        self.assertLoggedEqual("earlier block gets default", "\\an2", blocks[1].assigned_tag)
        self.assertLoggedEqual("later block", "\\an8", blocks[0].assigned_tag)
        self.assertLoggedSequenceEqual("list order unchanged", ["{\\an8}Later", "Earlier"], [ block.text for block in blocks ])

    def test_ZeroAndNegativeDuration(self):
        blocks = BuildBlocks([(1000, 1000), (1000, 1000), (3000, 2000), (2500, 2600)])
        ResolvePositions(blocks, CreateOptions())

        for block in blocks:
            self.assertLoggedIn(f"tag for {block.timing}", block.assigned_tag, POSITION_TAGS)

    def test_ExistingTagIsReplaced(self):
        blocks = [
            SubtitleBlock.Construct(0, 0, 4000, "{\\an5}First"),
            SubtitleBlock.Construct(1, 1000, 3000, "{\\an2}Second\nline two"),
        ]
        ResolvePositions(blocks, CreateOptions())

        self.assertLoggedEqual("default strips tag", "First", blocks[0].text)
        self.assertLoggedEqual("tag replaced", "{\\an8}Second\nline two", blocks[1].text)

    def test_KeepDefault(self):
        blocks = BuildBlocks([(0, 4000), (5000, 6000)], ["{\\an8}One", "Two"])
        ResolvePositions(blocks, CreateOptions(omit_default=False))

        self.assertLoggedSequenceEqual("default tag written", ["{\\an2}One", "{\\an2}Two"], [ block.text for block in blocks ])

    def test_IgnoreExistingReservesTag(self):
        blocks = BuildBlocks([(0, 4000), (1000, 3000), (1500, 2500)], ["{\\an2}Kept", "Plain", "{\\an9}Odd"])
        ResolvePositions(blocks, CreateOptions(ignore_existing=True))

        self.assertLoggedTrue("first kept", blocks[0].keep_existing)
        self.assertLoggedEqual("first text", "{\\an2}Kept", blocks[0].text)
        self.assertLoggedEqual("second avoids reserved tag", "\\an8", blocks[1].assigned_tag)
        self.assertLoggedEqual("second text", "{\\an8}Plain", blocks[1].text)
        self.assertLoggedEqual("tag outside palette kept", "{\\an9}Odd", blocks[2].text)
        self.assertLoggedEqual("tag outside palette assigned", "\\an9", blocks[2].assigned_tag)

    def test_IgnoreExistingIsIdempotent(self):
        texts = ["{\\an8}A", "{\\an5}B", "{\\an2}C", "D"]
        blocks = BuildBlocks([(0, 1000), (2000, 3000), (4000, 5000), (6000, 7000)], texts)
        ResolvePositions(blocks, CreateOptions(ignore_existing=True, omit_default=False))

        first_pass = [ block.text for block in blocks ]
        self.assertLoggedSequenceEqual("first pass", ["{\\an8}A", "{\\an5}B", "{\\an2}C", "{\\an2}D"], first_pass)

        ResolvePositions(blocks, CreateOptions(ignore_existing=True, omit_default=False))
        self.assertLoggedSequenceEqual("second pass", first_pass, [ block.text for block in blocks ])

    def test_CleanStripsAllTags(self):
        blocks = BuildBlocks([(0, 4000), (1000, 3000)], ["{\\an8}Hello {\\an5}there\n{\\an4}again", "{\\an8}Other"])
        ResolvePositions(blocks, CreateOptions(clean=True, ignore_existing=True))

        self.assertLoggedFalse("clean overrides ignore-existing", blocks[1].keep_existing)
        self.assertLoggedEqual("first text", "Hello there\nagain", blocks[0].text)
        self.assertLoggedEqual("second text", "{\\an8}Other", blocks[1].text)

    def test_EmptyList(self):
        resolver = OverlapResolver(CreateOptions())
        resolver.ResolvePositions([])

        self.assertLoggedEqual("overflow count", 0, resolver.overflow_count)


if __name__ == '__main__':
    unittest.main()
