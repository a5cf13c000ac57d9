# lambdacheck

`lambdacheck` holds the syntax tree of a small untyped lambda-calculus
language and the passes that run over it. A program is a list of constant
definitions, each binding a name to a lambda expression.

- **checking**: every identifier must be bound by an enclosing abstraction
  or by a top-level definition, and no name may be defined twice. Problems are
  reported on a stream together with the offending source line, underlined.
- **transforming**: abstractions over several variables (`λx,y,z. e`) are
  curried, in place, into nested single-variable abstractions.
- **printing**: the tree of every definition is drawn with box-drawing
  characters, applications shown as `@` and abstractions as `λ`.

It has no dependencies outside the standard library.

## Modules

| Module | What it holds |
| --- | --- |
| `lambdacheck.syntax` | `Token`, `Identifier`, `Variable`, `Abstraction`, `Application`, `Statement` and `Program`, the nodes of the syntax tree |
| `lambdacheck.interpreter` | `check`, `transform`, `format_tree`, `print_tree` and `error_underline` |
| `lambdacheck.symbols` | `SymbolTable`, the table of top-level definitions, and `ScopeStack`, the stack of bound variables |
| `lambdacheck.hashmap` | `HashMap`, a string-keyed chained hash map with power-of-two buckets that doubles as it fills, and `hash_key` |
| `lambdacheck.arena` | `Arena`, a block allocator with a usage bitmap and chained overflow nodes, `ArenaError` and `next_power_of_two` |

## Building a program

Nodes carry their source positions: a `Token` has a text, a row and an
inclusive column range; an `Identifier` is a chain of tokens (`x,y,z`) whose
span reaches to the end of the chain. `Program` needs at least one statement
and raises `ValueError` otherwise; so does a `Statement` without a name or
an expression.

```python
from lambdacheck.syntax import (
    Abstraction, Identifier, Program, Statement, Token, Variable,
)

body = Variable(Identifier(Token("x", 1, 10, 10)))
lam = Abstraction(Identifier(Token("x", 1, 7, 7)), body, 1, 6, 1, 10)
stmt = Statement(Identifier(Token("id", 1, 1, 2)), lam, 1, 1, 1, 10)
program = Program("id.ld", [stmt])
```

## Checking, transforming and printing

```python
import sys

from lambdacheck.interpreter import check, format_tree, print_tree, transform

table = check(program, 32, sys.stderr)  # SymbolTable of the definitions
transform(program)                      # curry multi-variable abstractions
print_tree(program, sys.stdout)
```

`check` always returns the `SymbolTable`; the problems it finds are only
written to the stream (standard error by default). Each report is followed by
`error_underline`, which re-reads the line from the file named by the
program and marks the columns in red; if the file cannot be opened, it
writes a one-line notice instead.

`format_tree(program)` returns the drawing as a string. For the program
above it is:

```
id
└── λx
    └── x
```

## The supporting containers

`HashMap` is a `MutableMapping` with `str` keys. Its load threshold may not
be below `0.75`.

```python
from lambdacheck.hashmap import HashMap

names = HashMap(32, 0.75)
names["id"] = 1
names["const"] = 2
assert "id" in names and len(names) == 2
del names["id"]
```

`Arena` hands out integer addresses. Without a block size it is
byte-granular; with one (at least 8, rounded up to a power of two) it works
in blocks. `read` and `write` reach the bytes of an allocation, `realloc`
moves an allocation to a larger one and refuses to shrink, `reset` drops
every allocation and every extra node, and `used` counts the bytes marked in
use.

```python
from lambdacheck.arena import Arena

arena = Arena(1 << 20, 5, 64)
ptr = arena.alloc(100)
arena.write(ptr, b"hello")
arena.free(ptr)
print(arena.describe())
```

`Arena` raises `ArenaError` where a request cannot be met or is invalid,
for instance when every allowed node is full or an address is not a live
allocation.

## What it does not do

- It reads no source text: there is no lexer or parser, so a `Program` has
  to be built from nodes as shown above.
- It has no command-line tool.
- It does not evaluate programs: there is no reduction or conversion to
  another form, only checking, currying and printing.