import pytest

from rekat.state import State


def _sample_state() -> State:
    state = State()
    state.add_frame(5, 100, 2, 4)
    state.add_frame(-7, 65535, 0, 8)
    state.bpm = 90.5
    state.sample_rate = 22050
    state.phrase = "la-la"
    return state


def test_defaults():
    state = State()
    assert len(state) == 0
    assert state.sample_rate == 44100
    assert state.bpm == 120.0


def test_dimension_fills_with_zeros():
    state = State(dimension=3)
    assert state.frequencies == [0, 0, 0]
    assert state.intensities == [0, 0, 0]
    assert state.lengths == [0] * 6


def test_add_frame_stores_length_before_pause():
    state = State()
    state.add_frame(5, 100, 2, 4)
    assert state.frequencies == [5]
    assert state.intensities == [100]
    assert state.lengths == [4, 2]


def test_empty_add_frame():
    state = State()
    state.add_frame()
    assert len(state) == 1
    assert state.lengths == [0, 0]


def test_frame_replaces_values():
    state = State(dimension=2)
    state.frame(1, 3, 50, 6, 7)
    assert state.frequencies == [0, 3]
    assert state.intensities == [0, 50]
    assert state.lengths == [0, 0, 7, 6]


def test_frame_out_of_range():
    state = State(dimension=1)
    with pytest.raises(IndexError):
        state.frame(1, 0, 0, 0, 0)


def test_frame_value_out_of_range():
    state = State(dimension=1)
    with pytest.raises(ValueError):
        state.frame(0, 0, -1, 0, 0)


def test_resize_keeps_prefix():
    state = _sample_state()
    state.resize(1)
    assert state.frequencies == [5]
    assert state.lengths == [4, 2]


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "song.xdg"
    original = _sample_state()
    original.save(path)
    loaded = State()
    loaded.load(path)
    assert loaded.frequencies == original.frequencies
    assert loaded.intensities == original.intensities
    assert loaded.lengths == original.lengths
    assert loaded.bpm == original.bpm
    assert loaded.sample_rate == original.sample_rate
    assert loaded.phrase == original.phrase


def test_file_starts_with_frame_count(tmp_path):
    path = tmp_path / "song.xdg"
    _sample_state().save(path)
    raw = path.read_bytes()
    assert raw[:8] == (2).to_bytes(8, "little")
    assert raw[8:9] == b"\n"


def test_constructor_loads_existing_file(tmp_path):
    path = tmp_path / "song.xdg"
    _sample_state().save(path)
    state = State(path)
    assert state.frequencies == [5, -7]
    assert state.phrase == "la-la"


def test_constructor_with_new_path_has_one_frame(tmp_path):
    state = State(tmp_path / "missing.xdg")
    assert len(state) == 1


def test_save_refuses_to_overwrite(tmp_path):
    path = tmp_path / "song.xdg"
    _sample_state().save(path)
    with pytest.raises(FileExistsError):
        State().save(path)


def test_forced_save_overwrites(tmp_path):
    path = tmp_path / "song.xdg"
    _sample_state().save(path)
    State(dimension=1).save(path, force=True)
    assert len(State(path)) == 1


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        State().load(tmp_path / "missing.xdg")


def test_load_without_path():
    with pytest.raises(ValueError):
        State().load()


def test_load_truncated_file(tmp_path):
    path = tmp_path / "song.xdg"
    _sample_state().save(path)
    path.write_bytes(path.read_bytes()[:20])
    with pytest.raises(ValueError):
        State().load(path)


def test_str_lists_settings_and_frames():
    state = State()
    state.add_frame(5, 100, 2, 4)
    text = str(state)
    assert text.startswith("\tvalues:\n\tbpm: 120\n\tsmp: 44100\n\tlen: 1\n")
    assert "\tF: 5\tI: 100\tL1:4\tL2:2\n" in text