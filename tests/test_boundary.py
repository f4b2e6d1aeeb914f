from repeatloop.core.boundary import BoundaryDetector, classify, effective_hysteresis
from repeatloop.core.session import RepeatWindow


WINDOW = RepeatWindow(0.0, 10.0)


def _count_crossings(samples, window=WINDOW, hysteresis=1.0):
    crossed_flag = False
    count = 0
    for position in samples:
        result = classify(position, window, crossed_flag, hysteresis=hysteresis)
        if result.crossed:
            count += 1
            crossed_flag = True
        elif result.should_reset_debounce:
            crossed_flag = False
    return count


def test_crossing_fires_only_when_not_already_crossed():
    assert classify(10.0, WINDOW, False).crossed
    assert classify(10.4, WINDOW, False).crossed
    assert not classify(10.4, WINDOW, True).crossed
    assert not classify(9.99, WINDOW, False).crossed


def test_debounce_resets_only_below_hysteresis_margin():
    assert not classify(9.5, WINDOW, True).should_reset_debounce
    assert not classify(9.0, WINDOW, True).should_reset_debounce
    assert classify(8.9, WINDOW, True).should_reset_debounce
    assert not classify(10.2, WINDOW, True).should_reset_debounce


def test_jittery_samples_count_once_per_pass():
    assert _count_crossings([9.8, 10.2, 10.3, 10.1, 7.0, 10.5]) == 2


def test_noise_around_end_does_not_rearm():
    assert _count_crossings([9.7, 10.0, 9.6, 10.1, 9.4, 10.2]) == 1


def test_short_window_clamps_margin():
    window = RepeatWindow(5.0, 5.5)
    assert effective_hysteresis(window, 1.0) == 0.25
    assert _count_crossings([5.1, 5.6, 5.1, 5.5], window=window) == 2


def test_detector_uses_configured_margin():
    detector = BoundaryDetector(hysteresis=3.0)
    assert not detector.classify(7.5, WINDOW, True).should_reset_debounce
    assert detector.classify(6.9, WINDOW, True).should_reset_debounce


def test_negative_margin_is_treated_as_zero():
    detector = BoundaryDetector(hysteresis=-2.0)
    assert detector.hysteresis == 0.0
    assert detector.classify(9.99, WINDOW, True).should_reset_debounce
