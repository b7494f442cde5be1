"""
Tests for split point planning and segment construction
"""
import unittest

from silence_splitter.core import Segment, SilenceInterval, plan_boundaries, segments_from_boundaries


def _intervals(*pairs):
    return [SilenceInterval(s, e) for s, e in pairs]


class TestPlanBoundaries(unittest.TestCase):

    def test_midpoints_between_implicit_endpoints(self):
        boundaries = plan_boundaries(_intervals((10, 12), (30, 34)), 60)
        self.assertEqual(boundaries, [0.0, 11.0, 32.0, 60.0])
        self.assertEqual(len(boundaries) - 1, 3)

    def test_no_intervals_means_one_segment(self):
        self.assertEqual(plan_boundaries([], 42.5), [0.0, 42.5])

    def test_overlapping_midpoint_is_dropped(self):
        boundaries = plan_boundaries(_intervals((5, 9), (6, 8)), 60)
        self.assertEqual(boundaries, [0.0, 7.0, 60.0])

    def test_edge_silences_do_not_duplicate_endpoints(self):
        # leading silence centred on 0 and trailing silence reaching the end
        boundaries = plan_boundaries(_intervals((0, 4), (50, 60)), 60)
        self.assertEqual(boundaries, [0.0, 2.0, 55.0, 60.0])

    def test_midpoint_at_end_is_dropped(self):
        boundaries = plan_boundaries(_intervals((10, 12), (59, 61)), 60)
        self.assertEqual(boundaries, [0.0, 11.0, 60.0])

    def test_min_gap_drops_near_empty_segments(self):
        intervals = _intervals((10, 12), (11, 11.5), (59.5, 60))
        self.assertEqual(plan_boundaries(intervals, 60, min_gap=0.5), [0.0, 11.0, 60.0])

    def test_result_is_strictly_increasing(self):
        intervals = _intervals((1, 3), (2, 2.5), (2.4, 10), (10, 11), (20, 21), (20.1, 20.9), (58, 70))
        boundaries = plan_boundaries(intervals, 60)
        self.assertEqual(boundaries[0], 0.0)
        self.assertEqual(boundaries[-1], 60.0)
        for a, b in zip(boundaries, boundaries[1:]):
            self.assertLess(a, b)

    def test_is_deterministic(self):
        intervals = _intervals((10, 12), (30, 34))
        self.assertEqual(plan_boundaries(intervals, 60), plan_boundaries(list(intervals), 60))

    def test_invalid_total_duration(self):
        with self.assertRaises(ValueError):
            plan_boundaries([], 0)
        with self.assertRaises(ValueError):
            plan_boundaries([], -5)


class TestSegmentsFromBoundaries(unittest.TestCase):

    def test_open_ended_last_segment(self):
        segments = segments_from_boundaries([0.0, 11.0, 32.0, 60.0])
        self.assertEqual(segments, [
            Segment(1, 0.0, 11.0),
            Segment(2, 11.0, 32.0),
            Segment(3, 32.0, None),
        ])

    def test_closed_last_segment(self):
        segments = segments_from_boundaries([0.0, 60.0], open_ended=False)
        self.assertEqual(segments, [Segment(1, 0.0, 60.0)])
        self.assertEqual(segments[0].duration, 60.0)

    def test_needs_two_boundaries(self):
        with self.assertRaises(ValueError):
            segments_from_boundaries([0.0])


if __name__ == "__main__":
    unittest.main()
