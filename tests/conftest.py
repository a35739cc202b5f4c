from pytest import Item, fixture

from pydc.machine import Machine


@fixture
def output():
    '''
    Everything the machine printed, one entry per emit.
    '''
    return []


@fixture
def machine(output):
    return Machine(emit=output.append)


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP and enable_assertion_pass_hook.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
