import pytest

from sapf.config import SapfConfig


HELP_OUTPUT = """\
sapf version 0.1.21
type 'help' for help.

BUILT IN FUNCTIONS

*** stack manipulation functions ***
 clear (... -->) remove all items from the stack.
 dup (a --> a a) push the top item on the stack again.
 swap (a b --> b a) exchange the top two items on the stack.
*** math functions ***
 add @ak (a b --> c) addition.
 neg @a (a --> b) negation.
       + @ak (a b --> c) operator form of add.
 ramp (n --> out)
 pi - the constant pi.
 Argument Automapping: a, k, z
*** stack manipulation functions ***
 drop (a -->) remove the top item on the stack.
"""


@pytest.fixture
def help_output():
    return HELP_OUTPUT


@pytest.fixture
def storage_config(tmp_path):
    return SapfConfig(binary_path="sapf", storage_dir=tmp_path)
