"""Write the reference report that exercises StringProcList."""

from __future__ import annotations

import sys
from collections import deque

from .proclist import StringProcList

DEFAULT_OUTPUT = "salida.caso.propio.ej1.txt"
MAX_TYPE = 8
CONCAT_PREFIX = "junta-constelaciones-mision-estrellas:"
FREE_BANNER = "======================== Libera memoria =======================\n"

STARS = (
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "procyon", "altair", "achenar", "fomalhaut",
)

PART_A_MISSIONS = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "cisne", "orion", "centauro", "juno", "hubble", "irazusta", "terra",
    "cassini-huygens", "artemis", "columbia", "kepler", "aqua", "sputnik",
    "insight", "messenger", "osiris", "rex", "chandra", "curiosity",
)

PART_B_NAMES = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "cisne", "orion", "centauro", "juno", "hubble",
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse", "sirio",
    "procyon", "altair", "achenar",
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "cisne",
    "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo", "crux", "cisne",
    "orion", "centauro", "juno", "hubble",
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "cisne", "orion", "centauro", "juno", "hubble",
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse", "sirio",
    "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo", "crux", "cisne",
    "luna", "ganimedes", "titan", "calisto", "io", "europa", "luna", "oberon",
    "titania", "rhea", "tritón", "encélado", "mimas", "titán", "dione", "luna",
    "umbriel", "ariel", "miranda", "galemede", "apollo 11", "soyuz", "iss",
    "hubble", "cassini-huygens", "juno", "artemis", "chandrayaan-2", "ceres",
    "vesta", "pallas", "hygiea", "iris", "eris", "juno", "hebe", "palas",
    "victoria",
)

_U32 = 0xFFFFFFFF
_MODULUS = 2147483647


def _c_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class CRand:
    """The additive-feedback generator behind the C library's rand()/srand()."""

    def __init__(self, seed: int = 1):
        seed &= _U32
        if seed == 0:
            seed = 1
        word = seed - (1 << 32) if seed >= 1 << 31 else seed
        values = [word]
        for _ in range(1, 31):
            hi = _c_div(word, 127773)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += _MODULUS
            values.append(word)
        values.extend(values[i - 31] for i in range(31, 34))
        self._state = deque((v & _U32 for v in values), maxlen=34)
        for _ in range(310):
            self._step()

    def _step(self) -> int:
        value = (self._state[-31] + self._state[-3]) & _U32
        self._state.append(value)
        return value

    def next(self) -> int:
        """Return the next value in [0, 2**31)."""
        return self._step() >> 1


def _fill(lst: StringProcList, names, rng: CRand) -> None:
    for name in names:
        lst.add_node(rng.next() % MAX_TYPE, name)


def write_part_a(out, rng: CRand) -> None:
    """Write the list-building section of the report."""
    def line(text: str) -> None:
        out.write(text)
        out.write("\n")

    line("== Ejercicio 1a ==\n")
    line("Creando lista vacia\n")
    line(FREE_BANNER)
    line("Creando nodo vacio\n")
    line(FREE_BANNER)
    lst = StringProcList()
    line("Creando lista vacia\n")
    lst.dump(out)
    out.write("\n")
    line("Agregando estrellas:\n")
    _fill(lst, STARS, rng)
    lst.dump(out)
    out.write("\n")
    line(FREE_BANNER)
    line("Creando lista vacia\n")
    lst = StringProcList()
    line("Agregando constelaciones y misiones:\n")
    _fill(lst, PART_A_MISSIONS, rng)
    lst.dump(out)
    out.write("\n")
    line(FREE_BANNER)
    out.write("======================== Fin del test 1a =======================")


def write_part_b(out, rng: CRand) -> None:
    """Write the concatenation section of the report."""
    out.write("== Ejercicio 1b ==\n\n")
    lst = StringProcList()
    out.write("Agregando constelaciones y misiones:\n\n")
    _fill(lst, PART_B_NAMES, rng)
    for node_type in range(MAX_TYPE):
        out.write(lst.concat(node_type, CONCAT_PREFIX))
        out.write("\n")
    out.write("======================== Fin del test 1b =======================")


def run_report(path=DEFAULT_OUTPUT) -> None:
    """Write the whole report to path, replacing any earlier one."""
    rng = CRand(0)
    with open(path, "w", encoding="utf-8") as out:
        write_part_a(out, rng)
        write_part_b(out, rng)


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    run_report(args[0] if args else DEFAULT_OUTPUT)
    return 0


if __name__ == "__main__":
    sys.exit(main())