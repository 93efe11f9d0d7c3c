# chanworks

A collection of small, concurrent tools and building blocks built on
threads, queues and locks:

- **memo** – a concurrency-safe memoizing cache (`Memo`) and a variant
  whose cache lives in a single background thread (`MemoServer`), plus
  `http_get_body`, `sequential` and `concurrent` for timing fetches
  through either of them.
- **bank** – a thread-safe account (`Bank`) with `deposit`, `balance`
  and `withdraw`.
- **pipeline** – `counter`, `squarer` and `printer` generator stages.
- **spinner** – a text spinner shown while a slow Fibonacci number
  (`fib`) is computed.
- **countdown** – a launch countdown that can be aborted.
- **links**, **crawl**, **mirror**, **first** – extract links from HTML
  pages, crawl the web concurrently with an optional depth limit, mirror
  a site to disk, and fetch whichever of several URLs answers first.
- **du** – concurrent disk usage of one or more directory trees.
- **thumbnail** – make thumbnail-size copies of images.
- **newton** – render Newton's fractal for z⁴ − 1 in parallel and serve
  it as PNG over HTTP.
- **reverb**, **clockall**, **netcat** – a TCP echo server and two TCP
  clients.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
from chanworks.memo import Memo
from chanworks.bank import Bank
from chanworks.pipeline import counter, squarer
from chanworks.spinner import fib

def slow_lookup(key):
    return key.upper()

memo = Memo(slow_lookup)
memo.get("abc")          # calls slow_lookup once
memo.get("abc")          # served from the cache

account = Bank(100)
account.deposit(50)
account.withdraw(30)     # True: enough money
account.withdraw(1000)   # False: balance unchanged
account.balance()        # 120

list(squarer(counter(5)))  # [0, 1, 4, 9, 16]
fib(10)                    # 55
```

`Memo` and `MemoServer` can be shared between threads; concurrent
requests for the same key call the underlying function only once, and an
exception it raises is cached and raised again for that key. Call
`MemoServer.close()` (or use it as a context manager) when finished.

Other entry points for library use include `chanworks.links.extract`,
`chanworks.crawl.crawl`, `chanworks.mirror.Mirror`,
`chanworks.first.fetch_first`, `chanworks.du.disk_usage`,
`chanworks.thumbnail.make_thumbnails` and `chanworks.newton.render`.

## Commands

| Command | What it does |
| --- | --- |
| `chanworks-bank [-n N]` | deposits 1..N concurrently and prints the balance |
| `chanworks-pipeline [-n N] [--forever]` | prints the squares of the natural numbers |
| `chanworks-spinner [N]` | spins while computing Fibonacci(N) |
| `chanworks-countdown` | counts down to launch; press return to abort |
| `chanworks-crawl [-d DEPTH] [-w WORKERS] URL ...` | crawls from the given pages and prints each URL found |
| `chanworks-mirror [-d DEPTH] URL ...` | mirrors a site into HOST/PATH files below the current directory; Ctrl-C cancels |
| `chanworks-first URL ...` | prints the URL and headers of the first URL to answer |
| `chanworks-du [-v] [DIR ...]` | prints file count and size under each directory |
| `chanworks-thumbnail FILE ...` | writes `NAME.thumb.EXT` next to each image |
| `chanworks-newton [--size N] [--port PORT]` | renders the Newton fractal and serves it as PNG (port 8080 by default) |
| `chanworks-reverb` | echo server on localhost:8000 that shouts back each line |
| `chanworks-clockall NAME=HOST:PORT ...` | prints every line sent by several servers, prefixed with each name |
| `chanworks-netcat [HOST:PORT]` | connects stdin and stdout to a TCP server (localhost:8000 by default) |

For example, start the echo server in one terminal and talk to it from
another:

```
chanworks-reverb
chanworks-netcat
```

Or measure a directory tree:

```
chanworks-du /var/log
```

Each command accepts `--help` for its options.

## What it does not do

The package has no time-of-day server: `chanworks-clockall` only reads
from servers that are already running elsewhere. Nor does it have a
chat server; `chanworks-reverb` is its only TCP server besides the
HTTP server of `chanworks-newton`.