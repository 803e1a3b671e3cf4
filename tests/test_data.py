from perfstat.data import BenchResult, Collection, Key
from perfstat.delta import u_test
from perfstat.order import by_delta, by_name, reverse, sort_table


def _results(spec):
    out = []
    for name, base in spec:
        for i in range(6):
            out.append(BenchResult(f"Benchmark{name} 1000 {base + i} ns/op {1000 / (base + i)} MB/s"))
    return out


OLD = [("Json", 100), ("Gob", 200), ("Xml", 300), ("Yaml", 400)]
NEW = [("Json", 50), ("Gob", 400), ("Xml", 302), ("Yaml", 320)]


def _compare_collection():
    c = Collection(alpha=0.05, add_geomean=False, delta_test=u_test)
    c.add_results("old.txt", _results(OLD))
    c.add_results("new.txt", _results(NEW))
    return c


def test_compare_collection_sort_by_name():
    table = _compare_collection().tables()[0]
    sort_table(table, by_name)
    names = [r.benchmark for r in table.rows]
    assert names == sorted(names)
    sort_table(table, reverse(by_name))
    names = [r.benchmark for r in table.rows]
    assert names[::-1] == sorted(names)


def test_compare_collection_sort_by_delta():
    table = _compare_collection().tables()[0]
    sort_table(table, by_delta)
    deltas = [-r.pct_delta for r in table.rows]
    assert deltas == sorted(deltas)
    sort_table(table, reverse(by_delta))
    deltas = [r.pct_delta for r in table.rows]
    assert deltas == sorted(deltas)


def test_single_collection_sort_by_name():
    c = Collection(alpha=0.05, add_geomean=False, delta_test=u_test)
    c.add_results("old.txt", _results(OLD))
    table = c.tables()[0]
    sort_table(table, by_name)
    names = [r.benchmark for r in table.rows]
    assert names == sorted(names)
    assert len(names) == len(OLD)


def test_collection_order_field():
    c = _compare_collection()
    c.order = by_name
    names = [r.benchmark for r in c.tables()[0].rows]
    assert names == sorted(names)


def test_add_results_records_order():
    c = _compare_collection()
    assert c.configs == ["old.txt", "new.txt"]
    assert c.units == ["ns/op", "MB/s"]
    assert c.groups == [""]
    assert c.benchmarks[""] == ["Json", "Gob", "Xml", "Yaml"]
    assert c.metrics[Key("old.txt", "", "Json", "ns/op")].values[0] == 100


def test_tables_one_per_unit():
    tables = _compare_collection().tables()
    assert [t.metric for t in tables] == ["time/op", "speed"]


def test_skips_malformed_lines():
    c = Collection()
    c.add_results(
        "cfg",
        [
            BenchResult("BenchmarkA 10 5 ns/op"),
            BenchResult("BenchmarkB 10 5"),
            BenchResult("TestC 10 5 ns/op"),
            BenchResult("BenchmarkD 0 5 ns/op"),
            BenchResult("BenchmarkE x 5 ns/op"),
            BenchResult("BenchmarkF 10 bad ns/op 7 B/op"),
        ],
    )
    assert c.benchmarks[""] == ["A", "F"]
    assert Key("cfg", "", "F", "ns/op") not in c.metrics
    assert c.metrics[Key("cfg", "", "F", "B/op")].values == [7]


def test_split_by_groups():
    c = Collection(split_by=["goos", "format"])
    c.add_results(
        "cfg",
        [
            BenchResult("BenchmarkA 1 5 ns/op", labels={"goos": "linux"}, name_labels={"format": "json"}),
            BenchResult("BenchmarkA 1 6 ns/op", labels={"goos": "linux"}),
        ],
    )
    assert c.groups == ["goos:linux format:json", "goos:linux"]
    assert c.benchmarks["goos:linux"] == ["A"]


def test_name_labels_take_precedence():
    c = Collection(split_by=["format"])
    c.add_results(
        "cfg",
        [BenchResult("BenchmarkA 1 5 ns/op", labels={"format": "gob"}, name_labels={"format": "json"})],
    )
    assert c.groups == ["format:json"]


def test_multiple_groups_label_rows():
    c = Collection(split_by=["goos"])
    c.add_results(
        "cfg",
        [
            BenchResult("BenchmarkA 1 5 ns/op", labels={"goos": "linux"}),
            BenchResult("BenchmarkA 1 6 ns/op", labels={"goos": "darwin"}),
        ],
    )
    rows = c.tables()[0].rows
    assert [r.group for r in rows] == ["goos:linux", "goos:darwin"]