import io
import threading

import pytest

from oolab.sensors import (
    FireDetector,
    FireDetectorCamera,
    FireDetectorNode,
    FireDetectorPhotodiode,
    HardwareEmulator,
    Node,
    SensorCallable,
    SensorReceiver,
    make_fire_detector,
    main,
)


class _Collector(SensorCallable):
    def __init__(self, wanted):
        self.values = []
        self.wanted = wanted
        self.done = threading.Event()

    def callback(self, value):
        self.values.append(value)
        if len(self.values) >= self.wanted:
            self.done.set()


def test_emulator_delivers_increasing_values():
    collector = _Collector(wanted=4)
    out = io.StringIO()
    with HardwareEmulator(collector, interval=0.005, out=out):
        assert collector.done.wait(5)
    assert collector.values[:4] == list(range(4))


def test_emulator_stops_delivering_after_stop():
    collector = _Collector(wanted=2)
    out = io.StringIO()
    emulator = HardwareEmulator(collector, interval=0.005, out=out)
    assert collector.done.wait(5)
    emulator.stop()
    count = len(collector.values)
    assert emulator.running is False
    threading.Event().wait(0.05)
    assert len(collector.values) == count


def test_emulator_reports_start_and_stop():
    out = io.StringIO()
    emulator = HardwareEmulator(_Collector(1), interval=10, out=out)
    emulator.stop()
    assert out.getvalue().splitlines() == [
        "Started hardware emulator",
        "Stopped hardware emulator",
    ]


def test_emulator_without_autostart_is_idle():
    emulator = HardwareEmulator(_Collector(1), out=io.StringIO(), autostart=False)
    assert emulator.running is False


def test_emulator_cannot_start_twice():
    emulator = HardwareEmulator(_Collector(1), interval=10, out=io.StringIO())
    try:
        with pytest.raises(RuntimeError):
            emulator.start()
    finally:
        emulator.stop()


def test_sensor_callable_is_abstract():
    with pytest.raises(TypeError):
        SensorCallable()
    with pytest.raises(TypeError):
        FireDetector()


def test_sensor_receiver_prints_value():
    out = io.StringIO()
    SensorReceiver(out).callback(7)
    assert out.getvalue() == "SensorReceiver got value 7\n"


def test_node_publish_prints_message():
    out = io.StringIO()
    Node(out).publish("fire!")
    assert out.getvalue() == "fire!\n"


def test_camera_detector_reports_and_tracks():
    out = io.StringIO()
    detector = FireDetectorCamera(out)
    detector.callback(1)
    detector.callback(2)
    assert detector.history == [1, 2]
    assert "Fire detector camera got value: 2" in out.getvalue().splitlines()


def test_photodiode_detector_reports_and_tracks():
    out = io.StringIO()
    detector = FireDetectorPhotodiode(out)
    detector.callback(5)
    assert detector.history == [5]
    assert out.getvalue().splitlines()[-1] == "Fire detector photodiode got value: 5"


@pytest.mark.parametrize(
    "choice, message",
    [
        (0, "Fire detector camera got value: 4"),
        (1, "Fire detector photodiode got value: 4"),
    ],
)
def test_make_fire_detector_choices(choice, message):
    out = io.StringIO()
    detector = make_fire_detector(choice, out)
    detector.callback(4)
    assert detector.history == [4]
    assert out.getvalue().splitlines()[-1] == message


@pytest.mark.parametrize("choice", [-1, 2, "0", None])
def test_make_fire_detector_rejects_invalid(choice):
    with pytest.raises(ValueError):
        make_fire_detector(choice, io.StringIO())


def test_fire_detector_node_with_emulator():
    out = io.StringIO()
    node = FireDetectorNode(1, out)
    assert isinstance(node.detector, FireDetectorPhotodiode)
    with HardwareEmulator(node.detector, interval=0.005, out=out):
        for _ in range(500):
            if len(node.detector.history) >= 3:
                break
            threading.Event().wait(0.01)
    assert node.detector.history[:3] == [0, 1, 2]


def test_main_runs_camera_detector(capsys):
    assert main(["0", "--seconds", "0.1", "--interval", "0.01"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "Stopped hardware emulator"
    assert "Fire detector camera got value: 0" in lines


def test_main_rejects_bad_choice(capsys):
    assert main(["3", "--seconds", "0"]) == 1
    assert "invalid fire detector choice" in capsys.readouterr().err