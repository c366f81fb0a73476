import unittest

from kvsource.schemas.paging import OrderClause
from kvsource.schemas.records import Record
from kvsource.services.window import select_window


def _records(keys="abcde"):
    return [Record(key=key, value=str(index)) for index, key in enumerate(keys, start=1)]


def _keys(window):
    return "".join(record.key for record in window.records)


class CursorTrimTests(unittest.TestCase):
    def test_after_drops_through_the_matching_record(self):
        window = select_window(_records(), [], after="b")
        self.assertEqual(_keys(window), "cde")
        self.assertTrue(window.has_previous_page)
        self.assertFalse(window.has_next_page)

    def test_before_drops_from_the_tail_through_the_matching_record(self):
        window = select_window(_records(), [], before="d")
        self.assertEqual(_keys(window), "abc")
        self.assertFalse(window.has_previous_page)
        self.assertTrue(window.has_next_page)

    def test_after_and_before_together(self):
        window = select_window(_records(), [], after="a", before="e")
        self.assertEqual(_keys(window), "bcd")
        self.assertTrue(window.has_previous_page)
        self.assertTrue(window.has_next_page)

    def test_unmatched_cursor_empties_the_sequence(self):
        window = select_window(_records(), [], after="zzz")
        self.assertEqual(window.records, [])
        self.assertTrue(window.has_previous_page)

    def test_unmatched_before_cursor_empties_the_sequence(self):
        window = select_window(_records(), [], before="zzz")
        self.assertEqual(window.records, [])
        self.assertTrue(window.has_next_page)
        self.assertFalse(window.has_previous_page)

    def test_trim_on_empty_sequence_sets_no_flag(self):
        window = select_window([], [], after="a", before="b")
        self.assertEqual(window.records, [])
        self.assertFalse(window.has_previous_page)
        self.assertFalse(window.has_next_page)

    def test_ordered_cursor_matches_field_values(self):
        order = [OrderClause(field="value")]
        window = select_window(_records(), order, after=["2"])
        self.assertEqual(_keys(window), "cde")

    def test_cursor_from_another_order_matches_nothing(self):
        window = select_window(_records(), [], after=["2"])
        self.assertEqual(window.records, [])


class SizeBoundTests(unittest.TestCase):
    def test_first_truncates_and_flags_next_page(self):
        window = select_window(_records(), [], first=2)
        self.assertEqual(_keys(window), "ab")
        self.assertTrue(window.has_next_page)
        self.assertFalse(window.has_previous_page)

    def test_last_truncates_and_flags_previous_page(self):
        window = select_window(_records(), [], last=2)
        self.assertEqual(_keys(window), "de")
        self.assertTrue(window.has_previous_page)
        self.assertFalse(window.has_next_page)

    def test_counts_not_smaller_than_the_sequence_are_no_ops(self):
        for kwargs in ({"first": 5}, {"first": 10}, {"last": 5}, {"last": 10}):
            with self.subTest(**kwargs):
                window = select_window(_records(), [], **kwargs)
                self.assertEqual(_keys(window), "abcde")
                self.assertFalse(window.has_previous_page)
                self.assertFalse(window.has_next_page)

    def test_larger_first_is_applied_before_last(self):
        window = select_window(_records(), [], first=4, last=2)
        self.assertEqual(_keys(window), "cd")
        self.assertTrue(window.has_next_page)
        self.assertTrue(window.has_previous_page)

    def test_larger_last_is_applied_before_first(self):
        window = select_window(_records(), [], first=2, last=4)
        self.assertEqual(_keys(window), "bc")
        self.assertTrue(window.has_next_page)
        self.assertTrue(window.has_previous_page)

    def test_equal_first_and_last_take_the_head_only(self):
        window = select_window(_records("abc"), [], first=1, last=1)
        self.assertEqual(_keys(window), "a")
        self.assertTrue(window.has_next_page)
        self.assertFalse(window.has_previous_page)

    def test_zero_counts_yield_empty_windows(self):
        head = select_window(_records(), [], first=0)
        tail = select_window(_records(), [], last=0)
        self.assertEqual(head.records, [])
        self.assertTrue(head.has_next_page)
        self.assertEqual(tail.records, [])
        self.assertTrue(tail.has_previous_page)

    def test_size_bound_applies_after_trimming(self):
        window = select_window(_records(), [], after="a", first=2)
        self.assertEqual(_keys(window), "bc")
        self.assertTrue(window.has_previous_page)
        self.assertTrue(window.has_next_page)

    def test_input_list_is_not_modified(self):
        records = _records()
        select_window(records, [], after="b", last=1)
        self.assertEqual(len(records), 5)
