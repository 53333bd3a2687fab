from tskm.music import Chord, ChordSymbol, Tone, tones_label


def _tones():
    return [
        Tone(4, 5, "ts", "lab1"),
        Tone(5, 4, "ts", "lab2"),
        Tone(2, 1, "ts", "lab3"),
        Tone(3, 2, "ts", "lab4"),
    ]


def test_tone_identity_is_global_id():
    assert Tone(4, 5, "ts", "lab1") == Tone(4, 0, "other", "x")
    assert Tone(4, 5, "ts", "lab1") != Tone(5, 5, "ts", "lab1")
    assert len({Tone(1, 0, "a", "a"), Tone(1, 9, "b", "b")}) == 1


def test_tone_ordering():
    tone1, tone2, tone3, _ = _tones()
    assert tone1 < tone2
    assert sorted([tone1, tone2, tone3])[0] is tone3


def test_tone_str():
    text = str(Tone(4, 5, "ts", "lab1"))
    assert text.startswith("------------------ Tone ------------------\n")
    assert "\t\t\tglobalid : 4\n" in text
    assert "\t\t\tlabel    : lab1\n" in text


def test_chord_from_tones_sums_ids():
    chord = Chord.from_tones(_tones())
    assert chord.global_id == 14
    assert chord.label == chord.id == str(chord.global_id)
    assert chord.tones == set(_tones())


def test_chord_label_defaults_to_id():
    assert Chord(7, set()).label == "7"
    assert Chord(2, set(), "clab").label == "clab"


def test_chord_identity_ignores_tones():
    a = Chord(1, set(_tones()))
    b = Chord(1, set(), "other")
    assert a == b
    assert hash(a) == hash(b)
    assert Chord(1) < Chord(2)


def test_chord_mutation():
    tones = _tones()
    chord = Chord(1, set())
    chord.insert(tones[0])
    chord.insert_all(tones[1:])
    assert chord.tones == set(tones)
    chord.erase(tones[0])
    assert tones[0] not in chord.tones
    chord.clear()
    assert chord.tones == set()


def test_chord_retain_all_removes_given_tones():
    tones = _tones()
    chord = Chord(1, set(tones))
    chord.retain_all({tones[1]})
    assert chord.tones == {tones[0], tones[2], tones[3]}


def test_chord_str_lists_tones():
    tones = _tones()
    text = str(Chord(2, set(tones), "clab"))
    assert text.startswith("------------------ Chord ------------------\n")
    assert "label    : clab\n" in text
    assert text.count("------------------ Tone") == len(tones)


def test_tones_label_in_id_order():
    tones = _tones()
    assert tones_label(tones) == "[lab3 lab4 lab1 lab2]"
    assert tones_label([]) == "[]"


def test_chord_symbol_equality_and_order():
    a = ChordSymbol(1, "a", "[x]")
    b = ChordSymbol(2, "b", "[y]")
    assert a == ChordSymbol(1, "z", "")
    assert a < b and b < a
    assert not a < ChordSymbol(1, "a", "[x]")


def test_chord_symbol_str():
    text = str(ChordSymbol(3, "lab", "[x]"))
    assert "globalID : 3\n" in text
    assert "label    : lab\n" in text