# theine

The building blocks of a W-TinyLFU style in-memory cache, in pure Python with
no third-party dependencies.

## What is inside

| Module | Purpose |
| --- | --- |
| `theine.flag` | `Flag`, a bit set (`FlagBit`) recording where an entry lives: root, window, probation, protected, removed, from NVM, deleted |
| `theine.clock` | `Clock`, nanoseconds since a start instant (wall clock), a cached reading, and `expire_nano()` with saturating `saturating_add()` |
| `theine.hasher` | `Hasher`, a per-instance seeded 64-bit hash of any hashable key, or of a string derived from it by a function you pass |
| `theine.stats` | `Stats`, hits and misses with `hit_ratio()` |
| `theine.bloom` | `BloomFilter` over 64-bit hashes, used as a doorkeeper, and `next_power_of_two()` |
| `theine.sketch` | `CountMinSketch`, a blocked sketch of 4-bit counters that halves itself periodically, and `rehash()` |
| `theine.entry` | `Entry`, `PersistedEntry`, `ReadBufItem`, `WriteBufItem` and the `ListType` / `WriteCode` enums |
| `theine.linkedlist` | `LinkedList`, an intrusive doubly linked list threaded through entries |
| `theine.slru` | `Slru`, the segmented LRU (probation feeding protected) |
| `theine.persistence` | `DataBlock`, checksummed blocks of pickled items; `read_blocks()`, `decode_items()`, `ChecksumMismatch` |
| `theine.buffer` | `ReadBuffer`, a lossy 16-slot ring buffer that hands reads over in batches |
| `theine.counter` | `UnsignedCounter`, a striped unsigned 64-bit counter |
| `theine.rbmutex` | `RBMutex`, a reader-biased reader/writer lock with `read_locked()` / `write_locked()` context managers |
| `theine.singleflight` | `Group`, duplicate call suppression per key |
| `theine.secondary` | `SecondaryCache` abstract base class, `SecondaryItem`, and the dictionary-backed `SimpleMapSecondary` |

## Installing

```
pip install .
```

## A short tour

Frequency estimation with the sketch:

```python
from theine.hasher import Hasher
from theine.sketch import CountMinSketch

hasher = Hasher(None)
sketch = CountMinSketch()
sketch.ensure_capacity(1000)

h = hasher.hash("user:42")
for _ in range(3):
    sketch.add(h)
print(sketch.estimate(h))   # 3
```

A doorkeeper that lets keys through only on their second sighting:

```python
from theine.bloom import BloomFilter

door = BloomFilter(0.01)
h = hasher.hash("user:42")
door.insert(h)       # False: first time seen
door.exist(h)        # True
```

A segmented LRU:

```python
from theine.entry import Entry
from theine.slru import Slru

slru = Slru(100)
entry = Entry("a", "value", 1, 0)
slru.insert(entry)        # goes to probation
slru.access(entry)        # promoted to protected
print(entry.position())   # "PROTECTED"
```

Saving entries in checksummed blocks and reading them back:

```python
import io
from theine.entry import ListType
from theine.linkedlist import LinkedList
from theine.persistence import read_blocks, decode_items

lst = LinkedList(10, ListType.PROBATION)
lst.push_front(Entry("k", "v", 1, 0))

stream = io.BytesIO()
lst.persist(stream, sketch, hasher, block_type=3)
stream.seek(0)
for block in read_blocks(stream):
    for persisted in decode_items(block.data):
        print(persisted.key, persisted.value, persisted.frequency)
```

Suppressing duplicate concurrent calls:

```python
from theine.singleflight import Group

group = Group()
value = group.do("key", lambda: "loaded")   # "loaded"
```

Callers that arrive while a call for the same key is running wait for it
and get its value, or have its exception raised.

## What this package does not do

It provides the components only. There is no assembled cache object with
`get`/`set`/`delete`, no builder, no sharded store, no timer wheel for
expiring entries, no loading cache and no worker that moves evicted entries
to a `SecondaryCache`. Saving and restoring a whole cache is likewise left to
the caller: `LinkedList.persist()` and `read_blocks()` handle individual lists
and blocks.

## Running the tests

```
pip install .[test]
pytest
```