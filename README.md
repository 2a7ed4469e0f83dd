# sorac

`sorac` holds the building blocks of a front end for a small C-like
language, and a toy register machine that runs hand-written instruction
lists.

## Modules

- `sorac.tokens`: the token vocabulary. `TokenName` lists every token name,
  grouped behind category markers (`Separator`, `BasicType`, `Operator`, ...);
  `TokenType` and `LengthState` classify tokens; `Token` pairs a text pattern
  with a name and category. `TOKENS` is the registered token table.
  Lookups: `category_of(name)`, `tokens_in_category(category)` (raises
  `ValueError` for a name that is not a category), `find_tokens(pattern)`
  and `color_of(name)` (terminal colour code, or `None`).
- `sorac.grammar`: the grammar. `SyntaxTemplateType` names the
  non-terminals, `SyntaxTemplateName` names each alternative, and
  `SyntaxSequence` is one alternative as a tuple of units (token names and
  template types). `SyntaxMetaSequence` adds a list of
  `TemplateNameMetaData` records (template name, position, size).
  `alternatives(template_type)` returns a template's alternatives in grammar
  order; `is_token`, `is_template` and `unit_name` inspect single units.
- `sorac.cst`: `ConcreteSyntaxTree` takes a `ParseContext` (a
  `SyntaxMetaSequence` plus a token list), builds a tree of `Node` objects
  with `parse()`, and draws it with `render(moe=False)` as box-drawn lines
  with ANSI colours. With `moe=True` nodes are shown by the playful labels
  that `friendly_name(value)` returns.
- `sorac.metaobjects`: `TypeInfo` (name, width, pointer level, constness,
  array dimensions), `Expression`, and `make_type(token_name)`, which knows
  the width of `int` and raises `ValueError` for any other type.
- `sorac.vm`: `VirtualMachine` runs a list of `Instruction` values (an
  `Operation` and two word arguments) over a 1 KiB memory split into data,
  instruction and stack segments, with the registers in `Register`.

## Installing

The package has no dependencies outside the standard library. The `test`
extra adds pytest.

## Examples

Token lookups:

```python
from sorac.tokens import TokenName, category_of, find_tokens

category_of(TokenName.Int)    # TokenName.BasicType
find_tokens("/")              # the Slash and Div tokens, in table order
```

Grammar alternatives:

```python
from sorac.grammar import SyntaxTemplateType, alternatives

for sequence in alternatives(SyntaxTemplateType.Statement):
    print(sequence.name, [unit.name for unit in sequence])
```

Building a concrete syntax tree from template records and tokens:

```python
from sorac.cst import ConcreteSyntaxTree, ParseContext
from sorac.grammar import SyntaxMetaSequence, SyntaxTemplateName, TemplateNameMetaData
from sorac.tokens import TokenName

sequence = SyntaxMetaSequence(
    template_name_meta_data=[
        TemplateNameMetaData(SyntaxTemplateName.StatementSequence, 0, 2),
        TemplateNameMetaData(SyntaxTemplateName.EmptyStatementSequence, 0, 1),
    ]
)
tree = ConcreteSyntaxTree(ParseContext(sequence, [TokenName.End]))
root = tree.parse()     # StatementSequence -> [EmptyStatementSequence -> [Empty], End]
print(tree.render())
```

Running the virtual machine:

```python
import io
from sorac.vm import Instruction, Operation, Register, VirtualMachine

out = io.StringIO()
vm = VirtualMachine(out)
code = vm.execute([
    Instruction(Operation.MOV, Register.AX, ord("H")),
    Instruction(Operation.OUT, Register.AX),
    Instruction(Operation.RET, 0),
])
```

`execute` loads the instructions into the instruction segment, runs them
until `RET`, and returns the exit code (also available as `vm.exit_code`).
Everything it prints goes to `out`: a line for each memory write, a memory
dump before and after the run, the characters written by `OUT`, and the
exit code. Arithmetic wraps to 16 bits. `vm.registers` gives a snapshot of
the registers, `vm.read_memory(address, length)` a copy of memory,
`vm.dump_memory()` the coloured hex dump, and `vm.reset()` clears
everything. Reading or writing outside memory raises `InvalidAccessError`.

## What it does not do

`sorac` has no tokenizer that splits source text into tokens, no parser that
matches tokens against the grammar to produce template records, no code
generator and no command-line program. The token table and grammar are
data to build those on; a `ConcreteSyntaxTree` must be given its template
records and token list directly, and the virtual machine runs only
instruction lists written by hand.