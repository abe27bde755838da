"""Entry point for `python -m laia`."""

import sys


def _parse_cmd(locale, text):
    """Match a single input against the rule tiers and print it in test_cases.txt format."""
    from laia.commands import build_tiers
    from laia.commands.rules import match_tiers
    from laia.settings import Settings

    cmd = match_tiers(build_tiers(Settings.load()), text, locale)

    print(f"> {text}")
    if cmd is None:
        print("command: none")
        return

    print(f"command: {cmd.name}")
    print(f"tier: {cmd.tier}")
    for key, val in cmd.slots.items():
        print(f"{key}: {val}")
    if not cmd.complete:
        print(f"missing: {cmd.missing_slot}")


if __name__ == "__main__" or not sys.argv[0]:
    args = sys.argv[1:]
    if len(args) >= 2 and args[0] == "-parse":
        locale = "ca"
        if args[1].startswith("--locale="):
            locale = args[1].split("=", 1)[1]
            args = args[1:]
        _parse_cmd(locale, " ".join(args[1:]))
    else:
        from laia.main import main
        main()
