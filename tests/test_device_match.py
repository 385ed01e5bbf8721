from wakectl.core.device_match import best_devices, match_score
from wakectl.core.model import Device

NAS = Device(name="NAS", mac="00:11:22:33:44:55")
NAS_BACKUP = Device(name="nas-backup", mac="66:77:88:99:AA:BB")
DESKTOP = Device(name="Office Desktop", mac="AA:BB:CC:DD:EE:FF")


def test_exact_name_and_mac_score_highest() -> None:
    assert match_score(NAS, "nas") == 3
    assert match_score(NAS, "00-11-22-33-44-55") == 3


def test_prefix_beats_substring() -> None:
    assert match_score(NAS_BACKUP, "nas") == 2
    assert match_score(DESKTOP, "desk") == 1
    assert match_score(DESKTOP, "laptop") == 0
    assert match_score(DESKTOP, "  ") == 0


def test_exact_name_wins_over_prefix() -> None:
    assert best_devices([NAS_BACKUP, NAS, DESKTOP], "NAS") == [NAS]


def test_ties_are_all_returned() -> None:
    other = Device(name="nas-archive", mac="12:34:56:78:9A:BC")
    assert best_devices([NAS_BACKUP, other], "nas") == [NAS_BACKUP, other]


def test_no_match_returns_empty() -> None:
    assert best_devices([NAS, DESKTOP], "printer") == []
