import argparse
import json
import logging
import os
import sys

from .automaton import Automaton
from .conversion import complete, remove_unreachable_states
from .errors import AutomatonError
from .export import QUINTUPLE_STYLES, automaton_stats, format_quintuple
from .operations import UNION_STRATEGIES, complement, difference, intersect, union
from .parsing import SCHEMAS, read_automaton, write_automaton

logger = logging.getLogger(__name__)

UNARY_OPERATIONS = ("validate", "complete", "prune", "complement", "run", "quintuple")
BINARY_OPERATIONS = ("intersect", "union", "difference")


def build_arg_parser():
    p = argparse.ArgumentParser(
        prog="automata-algebra",
        description="Operaciones sobre AFDs: completar, complemento, intersección, unión y resta.",
    )
    p.add_argument("operation", choices=UNARY_OPERATIONS + BINARY_OPERATIONS, help="Operación a realizar")
    p.add_argument("inputs", nargs="+", help="Archivo(s) de entrada (.json o .xml)")
    p.add_argument("-o", "--output", help="Archivo de salida. Por defecto, junto a la primera entrada")
    p.add_argument("--in-format", choices=["json", "xml"], help="Forzar formato de entrada (auto por extensión)")
    p.add_argument("--out-format", choices=["json", "xml", "txt"], help="Forzar formato de salida (auto por extensión)")
    p.add_argument("--schema", choices=SCHEMAS, default="canonical", help="Esquema JSON de salida")
    p.add_argument("--strategy", choices=sorted(UNION_STRATEGIES), default="product", help="Estrategia de unión")
    p.add_argument("--style", choices=QUINTUPLE_STYLES, default="list", help="Formato de la quíntupla")
    p.add_argument("-w", "--word", action="append", default=[], help="Cadena a evaluar (operación run)")
    p.add_argument("--png", help="Guardar además una imagen del resultado")
    p.add_argument("--name", help="Nombre del autómata de salida")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Nivel de logging",
    )
    return p


def apply_operation(args, automata) -> Automaton:
    a = automata[0]
    if args.operation == "complete":
        return complete(a, name_suffix="__COMPLETE")
    if args.operation == "prune":
        return remove_unreachable_states(a)
    if args.operation == "complement":
        return complement(a)
    b = automata[1]
    if args.operation == "intersect":
        return intersect(a, b)
    if args.operation == "union":
        return union(a, b, strategy=args.strategy)
    if args.operation == "difference":
        return difference(a, b)
    raise ValueError(f"Unsupported operation: {args.operation}")


def default_output_path(args) -> str:
    base, ext = os.path.splitext(args.inputs[0])
    chosen_ext = args.out_format or ext.lstrip(".") or "json"
    return f"{base}_{args.operation}.{chosen_ext}"


def run(args) -> int:
    expected = 2 if args.operation in BINARY_OPERATIONS else 1
    if len(args.inputs) != expected:
        logger.error("'%s' needs %d input file(s), got %d", args.operation, expected, len(args.inputs))
        return 2

    automata = [read_automaton(path, args.in_format) for path in args.inputs]

    if args.operation == "validate":
        a = automata[0]
        print(f"{a.name}: OK")
        print(json.dumps(automaton_stats(a), ensure_ascii=False))
        return 0

    if args.operation == "run":
        a = automata[0]
        for word in args.word:
            verdict = "ACEPTADA" if a.accepts(word) else "RECHAZADA"
            print(f"{word!r}: {verdict}")
        return 0

    if args.operation == "quintuple":
        if args.output:
            write_automaton(automata[0], args.output, "txt", style=args.style)
        else:
            sys.stdout.write(format_quintuple(automata[0], style=args.style))
        return 0

    result = apply_operation(args, automata)
    if args.name:
        result.name = args.name
    logger.info(
        "%s: %d states, %d transitions, start %s, accepting %s",
        result.name, len(result.states), len(result.transitions),
        result.initial_state, result.final_states,
    )

    out_path = args.output or default_output_path(args)
    write_automaton(result, out_path, args.out_format, schema=args.schema, style=args.style)
    print(f"Input: {', '.join(args.inputs)}  ->  Output: {out_path}")

    if args.png:
        from .visualization import save_png

        save_png(result, args.png)
        logger.info("Image saved to %s", args.png)
    return 0


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )
    try:
        return run(args)
    except AutomatonError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nProgram interrupted by user")
        sys.exit(130)
