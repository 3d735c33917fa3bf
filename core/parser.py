from lark import Lark
from lark import Transformer
from lark.exceptions import VisitError

"""
This file defines the core parsing logic for all DSLs.

`DSLParser` is responsible for loading an EBNF grammar and converting raw DSL code
into a parse tree using the Lark parsing library.

`DSLTransformer` is a base class for transforming the Lark parse tree into a custom
abstract syntax tree (AST) or structured Python dataclasses. Each DSL should subclass
this transformer to define how grammar rules map to program elements.
"""

class DSLParser():
    def __init__(self, grammar_file: str, start_symbol: str, cache: bool = False):
        """
        Initialize the DSL parser by loading the EBNF grammar
        and setting up the Lark parser.

        :param grammar_file: Path to the EBNF grammar file
        :param start_symbol: The start symbol for grammar parsing
        :param cache: Let Lark cache the compiled parse tables on disk
        """
        # Read the grammar definition from file
        with open(grammar_file, 'r', encoding='utf-8') as f:
            grammar = f.read()

        self.start_symbol = start_symbol

        # LALR with the contextual lexer: deterministic, one tree per input, and
        # keywords only shadow identifiers in states where the keyword is legal
        self.parser = Lark(grammar, start=start_symbol, parser='lalr', lexer='contextual',
                           maybe_placeholders=False, propagate_positions=True, cache=cache)

    def parse(self, code: str):
        """
        Parse the given DSL code and return the Lark parse tree.

        :param code: DSL code as a string
        :return: The resulting parse tree
        """
        tree = self.parser.parse(code)
        return tree

    def parse_interactive(self, code: str):
        """
        Start a step-by-step parse of the given code.

        :param code: DSL code as a string
        :return: Lark interactive parser positioned before the first token
        """
        return self.parser.parse_interactive(code, start=self.start_symbol)

class DSLTransformer(Transformer):
    """
    A generic base transformer class based on Lark's Transformer,
    used to convert a Lark parse tree into an AST or other formats.
    Subclasses should implement specific node transformation logic.
    """
    # Exceptions raised by rule callbacks that should reach the caller as-is
    # instead of wrapped in Lark's VisitError
    passthrough_errors = ()

    def __init__(self):
        super().__init__()

    def transform(self, tree):
        """
        Recursively traverse the tree and transform each node into the target format.
        Errors listed in `passthrough_errors` are unwrapped from Lark's VisitError.
        """
        try:
            return super().transform(tree)
        except VisitError as e:
            if self.passthrough_errors and isinstance(e.orig_exc, self.passthrough_errors):
                raise e.orig_exc
            raise
