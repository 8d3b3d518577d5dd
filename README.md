# progkit

A collection of small, self-contained tools and library modules:

- **HTML trees** (`progkit.htmltree`): parse HTML into a `Node` tree, walk it
  in pre/post order with `for_each_node`, collect anchor links with `visit`,
  list element outlines with `outline` and `format_outline`, and find titles
  with `titles` and `sole_title`.
- **Links and fetching** (`progkit.links`, `progkit.crawler`): extract
  absolute links from a page (`extract`), crawl breadth-first
  (`breadth_first`) or with bounded concurrency (`crawl_concurrently`),
  download a URL to a local file (`fetch`), and wait for a server to answer
  with exponential back-off (`wait_for_server`).
- **Expressions** (`progkit.expr`, `progkit.surface`): a small arithmetic
  expression language with `+ - * /`, `pow`, `sin`, `sqrt` and variables,
  plus an SVG surface plotter served over WSGI at `/plot?expr=...`.
- **Data structures** (`progkit.intset`, `progkit.urlvalues`,
  `progkit.geometry`, `progkit.bytecounter`, `progkit.tempconv`): a bit-vector
  integer set, a multi-valued string mapping, points and paths, a byte-counting
  writer, and Celsius/Fahrenheit temperatures.
- **Concurrency** (`progkit.pipeline`, `progkit.cake`, `progkit.bank`,
  `progkit.memo`, `progkit.du`): generator pipelines and a countdown, a
  cake-shop simulation, thread-safe bank accounts (`Bank`, `TellerBank`),
  memoization designs from a plain cache (`SimpleMemo`) to a lock-based
  (`Memo`) and a monitor-thread (`MonitorMemo`) design that never computes the
  same key twice, and a disk-usage walker.
- **Network services** (`progkit.chat`, `progkit.shop`): an asyncio chat
  server and a tiny price-list web shop with `/list` and `/price` endpoints.
- **Images** (`progkit.thumbnail`): make JPEG thumbnails, at most 128 pixels
  on a side, of images Pillow can read.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library examples

```python
from progkit.intset import IntSet

x = IntSet()
for n in (1, 144, 9):
    x.add(n)
print(x)            # {1 9 144}

y = IntSet()
y.add(9)
y.add(42)
x.union_with(y)
print(x)            # {1 9 42 144}
print(x.has(9), x.has(123))   # True False
```

```python
from progkit.expr import parse, format_expr, ExprError

expr = parse("5 / 9 * (F - 32)")
print(format_expr(expr))      # ((5 / 9) * (F - 32))
print(expr.eval({"F": 212}))  # 100.0

try:
    parse("x % 2")
except ExprError as err:
    print(err)                # unexpected '%'
```

```python
from progkit.geometry import Point

print(Point(1, 2).distance(Point(4, 6)))   # 5.0
```

```python
from progkit.bank import Bank

bank = Bank()
bank.deposit(200)
bank.deposit(100)
print(bank.balance())         # 300
```

```python
from progkit.memo import Memo, http_get_body

memo = Memo(http_get_body)
body = memo.get("http://localhost:8000/")   # fetched once, then cached
```

## Commands

Each command is installed with the package:

| Command              | What it does                                                    |
|----------------------|-----------------------------------------------------------------|
| `progkit-htmltree`   | Reads HTML on standard input; modes `links`, `outline`, `tree`, `title` |
| `progkit-links`      | Subcommands `findlinks`, `crawl`, `title`, `fetch`, `wait`      |
| `progkit-crawl`      | Crawls the web concurrently from the given URLs (`--workers`)   |
| `progkit-tempflag`   | Prints the temperature given with `-temp` (e.g. `212F`) in Celsius |
| `progkit-surface`    | Serves SVG surface plots of a user-supplied expression          |
| `progkit-shop`       | Serves a small price list over HTTP                             |
| `progkit-sorting`    | Prints a playlist sorted in several orders                      |
| `progkit-xmlselect`  | Prints the text of selected elements of an XML document         |
| `progkit-du`         | Reports the number and total size of files under folders (`-v` for progress) |
| `progkit-chat`       | Runs a TCP chat server                                          |
| `progkit-pipeline`   | Subcommands `pipeline`, `spinner`, `countdown`                  |
| `progkit-thumbnail`  | Makes thumbnails of the image files named on standard input     |

The servers take `--host` and `--port` (default `localhost:8000`).

For example, to print the text under every `div div h2` path of an XML file:

```
progkit-xmlselect div div h2 < document.xml
```

and to total the disk usage of two folders:

```
progkit-du ./photos ./music
```

## What the package does not do

- It has no topological sort, no entry/exit tracing helper and no variadic
  sum utility.
- It has no clock or echo ("reverb") TCP servers and no netcat-style TCP
  client; the only TCP service is the chat server.