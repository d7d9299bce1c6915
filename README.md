# glibutil

A small collection of self-contained utilities with no dependencies outside
the standard library:

- **`glibutil.datapack`**: compact 7-bits-per-byte encoding of signed and
  unsigned 64-bit integers (MBN) and tag-length-value (TLV) packing.
- **`glibutil.version`**: the library version, and packing a
  `major.minor.micro` version into a single integer word and back.
- **`glibutil.history`**: `IntHistory`, a bounded, time-limited history of
  integer samples with a time-weighted average.
- **`glibutil.intarray`**: `IntArray`, a growable array of integers with
  find, remove and sort helpers.
- **`glibutil.idlepool`**: `IdlePool`, which holds objects and releases them
  once an `asyncio` event loop gets to them, plus a per-thread default pool.
- **`glibutil.idlequeue`**: `IdleQueue`, which runs callbacks in order on
  the next pass of an `asyncio` event loop and lets them be cancelled by tag.

## Installation

```
pip install .
```

## Integer and TLV encoding

MBN numbers store 7 bits per byte, most significant chunk first, with the
high bit of every byte but the last set. Signed numbers carry their sign in
bit `0x40` of the first byte.

```python
from glibutil.datapack import (
    signed_mbn_encode, signed_mbn_decode_exact,
    unsigned_mbn_encode, unsigned_mbn_decode,
    tlv_encode, tlvs_decode,
)

assert signed_mbn_encode(-129) == b"\xfe\x7f"
assert signed_mbn_decode_exact(b"\xfe\x7f") == -129
assert unsigned_mbn_encode(129) == b"\x81\x01"

value, next_offset = unsigned_mbn_decode(b"\x81\x01\x05", 0)   # (129, 2)

packed = tlv_encode(1, b"abc") + tlv_encode(2)
assert tlvs_decode(packed, [1, 2]) == {1: b"abc", 2: b""}
```

- `signed_mbn_size` / `unsigned_mbn_size` give the encoded length; the
  encoders take an optional `size` to pad the encoding to more bytes.
- `*_decode(data, offset)` return `(value, next_offset)`;
  `*_decode_exact(data)` require the data to hold exactly one number.
- `tlv_decode(data, offset)` returns `(tag, value, next_offset)` and
  `tlv_size(tag, length)` the size of one entry.
- `tlvs_decode(data, tags, skip_unknown=False)` returns a dict of the known
  tags found. Only the first 31 tags (up to a zero) are recognised.

Malformed input raises `DataPackError` (a `ValueError`); `tlvs_decode`
raises its subclasses `DuplicateTagError` and `UnknownTagError`, both with a
`tag` attribute. Values outside the 64-bit range raise `OverflowError`.

## Version words

```python
from glibutil.version import VERSION_STRING, version, version_word, version_minor

assert VERSION_STRING == "1.0.81"
assert version() >= version_word(1, 0, 69)
assert version_minor(version_word(1, 2, 3)) == 2
```

## Time-weighted history

`IntHistory(max_size, max_interval, time_func=None)` keeps at most
`max_size` samples no older than `max_interval`. The clock defaults to a
monotonic clock in microseconds; any callable returning an integer can be
passed. Non-positive sizes or intervals raise `ValueError`.

```python
from glibutil.history import IntHistory

clock = iter(range(1, 100)).__next__
history = IntHistory(max_size=8, max_interval=10, time_func=clock)
history.add(1)          # returns the current average
history.add(5)
print(history.median(default=0), history.size(), history.interval())
history.clear()
```

A sample added at the same time as the latest one, or at an earlier time,
replaces the latest one's value.

## Integer arrays

```python
from glibutil.intarray import IntArray

a = IntArray([0, 1, 2, 1, 0])
assert a.remove_all(1) == 2
a.sort_descending()
assert list(a) == [2, 0, 0]

b = IntArray([0, 1, 2, 4])
b.remove_fast(0)        # the last item fills the hole
assert b == [4, 1, 2]
```

Mutating methods that have nothing else to report (`append`, `prepend`,
`insert`, their `_vals` forms, `set_count`, `remove_index`,
`remove_index_fast`, `remove_range`) return the array so calls can be
chained. `find` returns `-1` when the value is missing and `to_ints` gives
an immutable tuple of the contents.

## Idle pool and idle queue

Both work on an `asyncio` event loop: the one passed in, or otherwise the
loop running when something is added. Both can be used as context managers.

```python
import asyncio
from glibutil.idlepool import IdlePool
from glibutil.idlequeue import IdleQueue

async def main():
    loop = asyncio.get_running_loop()

    pool = IdlePool(loop)
    pool.add(object(), lambda obj: print("released", obj))

    queue = IdleQueue(loop)
    queue.add(print, "first", tag=1)
    queue.add(print, "second", tag=2)
    queue.cancel_tag(2)

    await asyncio.sleep(0)
    await asyncio.sleep(0)
    queue.close()
    pool.destroy()

asyncio.run(main())
```

- `IdlePool.add(item, destroy=None)` returns the item. Only the thread that
  created the pool drains it. Without a loop, items stay in the pool until
  `drain()` is called. After `destroy()`, adding raises `RuntimeError`.
- `glibutil.idlepool.get_default()` returns the calling thread's pool,
  creating it on first use; `release_default()` drains and forgets it.
- `IdleQueue.add(run, data=None, destroy=None, tag=0)` queues `run(data)`;
  `destroy(data)` is called afterwards, or when the callback is cancelled
  with `cancel_tag` or `cancel_all`. Callbacks added while the queue runs
  wait for the next round. `contains_tag` tells whether a tagged callback is
  still waiting. After `close()`, adding raises `RuntimeError`.

## Running the tests

```
pip install .[test]
pytest
```