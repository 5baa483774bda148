import sys, argparse


def parse(argv=None) -> dict:
    parser = argparse.ArgumentParser(
        prog="python -m paramsys",
        description="""\
Inspect run-time parameter files and parameter name spellings. Use check to \
validate INI-like parameter files, flag and name to convert between \
parameter names and their command line spelling.""",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parsers = parser.add_subparsers(dest="command")

    check = parsers.add_parser(name="check", help="Validate parameter files and list their values.", formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    flag  = parsers.add_parser(name="flag",  help="Print the command line spelling of names.",       formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    name  = parsers.add_parser(name="name",  help="Print the parameter name of command line flags.", formatter_class=argparse.ArgumentDefaultsHelpFormatter, allow_abbrev=False)

    # === CHECK ===
    check.add_argument("files",           metavar="FILE", nargs="+", type=str,                 help="Parameter files, read in order.")
    check.add_argument("-o", "--overwrite", action="store_true",       default=False,          help="Let later files replace values of earlier ones.")
    check.add_argument("-y", "--yaml",    metavar="YAML",             type=str, default=None, help="Also write the parsed values to a YAML file.")
    check.add_argument("-i", "--ini",     action="store_true",         default=False,          help="Print the values grouped into [sections].")

    # === FLAG ===
    flag.add_argument("names", metavar="NAME", nargs="+", type=str, help="PascalCase parameter names.")

    # === NAME ===
    name.add_argument("flags", metavar="FLAG", nargs="*", type=str, help="Command line flags, e.g. --upwind-weight.")

    namespace, extras = parser.parse_known_args(argv)
    args: dict = vars(namespace)

    if args["command"] == "name":
        # flags look like options to argparse, so take every token after the command verbatim
        tokens = sys.argv[1:] if argv is None else list(argv)
        args["flags"] = [ t for t in tokens[tokens.index("name")+1:] if t != "--" ]
        if not args["flags"]:
            name.error("the following arguments are required: FLAG")
    elif extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")

    if args["command"] is None:
        parser.print_help()
        exit(-1)

    return args
