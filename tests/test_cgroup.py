from resmon.cgroup import CgroupVersion, detect_cgroup_version, read_text, sources


def test_detects_v2_from_controllers_file(make_tree):
    root = make_tree({"cgroup.controllers": ""})
    assert detect_cgroup_version(root) is CgroupVersion.V2


def test_v2_wins_when_v1_files_also_exist(make_tree):
    root = make_tree({
        "cgroup.controllers": "cpu memory\n",
        "cpu/cpu.cfs_quota_us": "-1\n",
        "memory/memory.limit_in_bytes": "1024\n",
    })
    assert detect_cgroup_version(root) is CgroupVersion.V2


def test_falls_back_to_v1(make_tree):
    root = make_tree({"memory/memory.limit_in_bytes": "1024\n"})
    assert detect_cgroup_version(root) is CgroupVersion.V1


def test_missing_root_is_v1(tmp_path):
    assert detect_cgroup_version(tmp_path / "nope") is CgroupVersion.V1


def test_read_text_absent_is_none(tmp_path):
    assert read_text(tmp_path, "cpu.max") is None
    assert read_text(tmp_path, "cpu/cpu.cfs_quota_us") is None


def test_read_text_returns_content(make_tree):
    root = make_tree({"cpu.max": "max 100000\n"})
    assert read_text(root, "cpu.max") == "max 100000\n"


def test_sources_follow_version(tmp_path):
    v2 = dict(sources(CgroupVersion.V2, tmp_path))
    v1 = dict(sources(CgroupVersion.V1, tmp_path))
    assert tmp_path / "cpu.max" in v2["CPU"]
    assert tmp_path / "memory/memory.stat" in v1["Memory"]
    assert str(CgroupVersion.V2) == "V2"
