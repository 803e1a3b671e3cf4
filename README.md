# perfstat

perfstat turns benchmark result lines into readable comparison tables.
A result line looks like this:

    BenchmarkEncode-8   100000   1726 ns/op   512 B/op

perfstat groups these lines by configuration, usually "old" and "new".
It drops outliers and reports the mean and spread of each metric. When
there are exactly two configurations, it also tests whether each
difference is significant.

## Installation

    pip install perfstat

## Building tables

```python
import io
from perfstat.data import BenchResult, Collection
from perfstat.text import format_text

old = [BenchResult("BenchmarkEncode 1000 1726 ns/op") for _ in range(10)]
new = [BenchResult("BenchmarkEncode 1000 1423 ns/op") for _ in range(10)]

collection = Collection()
collection.add_results("old.txt", old)
collection.add_results("new.txt", new)

out = io.StringIO()
format_text(out, collection.tables())
print(out.getvalue())
```

A `BenchResult` holds one result line in `content`. It also holds the
file-level `labels` and the per-benchmark `name_labels` for that line.

Lines are skipped in these cases:

- the line has fewer than four fields;
- the name does not start with `Benchmark`;
- the iteration count is not a non-zero integer.

Any value/unit pair whose value is not a number is skipped on its own.

`Collection` has options that change the tables:

- `delta_test` chooses the significance test. It takes
  `perfstat.delta.u_test` (Mann-Whitney U, the default),
  `perfstat.delta.t_test` (Welch t-test) or
  `perfstat.delta.no_delta_test`.

  A test that cannot produce a p-value raises a `DeltaTestError`
  subclass: `SampleSizeError`, `SamplesEqualError` or
  `ZeroVarianceError`. When that happens, the table shows the reason in
  the row's note.
- `alpha` is the p-value cutoff for a significant change. It defaults
  to 0.05.
- `add_geomean` adds a `[Geo mean]` row to each table.
- `split_by` lists label names. Rows are grouped by the values of those
  labels.
- `order` sets the row order. Use one of:
  - `perfstat.order.by_name`
  - `perfstat.order.by_delta`
  - either of those wrapped in `perfstat.order.reverse(...)`

  You can also sort a table afterwards with
  `perfstat.order.sort_table(table, order)`.

`Collection.tables()` returns one `perfstat.table.Table` per unit. Each
table holds `Row` objects. A row holds the benchmark name, the
`Metrics` for each configuration, and the formatted delta and note.

## Output formats

- `perfstat.text.format_text(out, tables)` writes fixed-width text to a
  text stream.
- `perfstat.text.format_csv(out, tables, norange)` writes CSV.
  `norange=True` leaves out the ± columns.
- `perfstat.html.format_html(tables)` returns an HTML fragment as a
  string.

## Units and scaling

`perfstat.units` classifies and normalises units:

```python
>>> from perfstat.units import tidy, class_of
>>> tidy(1, "ns/op")
(1e-09, 'sec/op')
>>> class_of("B/op")
<UnitClass.BINARY: 1>
```

`perfstat.scale` formats a number with at least three significant
digits and adds an SI or IEC prefix. `common_scale` picks one `Scaler`
that suits a whole list of values.

```python
>>> from perfstat.scale import scale
>>> from perfstat.units import UnitClass
>>> scale(123456789, UnitClass.DECIMAL)
'123.5M'
```

`perfstat.scaler.new_scaler(val, unit)` returns the formatting function
that the comparison tables use. For example, it shows `ns/op` values as
s, ms, µs or ns.

`perfstat.texttab.Table` is a small layout engine for text tables. It
supports column spans, alignment (`Align`), per-cell left margins
(`left_margin`) and shrink columns.

## What it does not do

perfstat is a library only. It has no command-line tool. It does not
read benchmark files itself: your code splits the input into
`BenchResult` lines and passes them to `Collection.add_results`. It
does not upload or store results anywhere.