import json
import os
import sys
from dataclasses import replace

from token_wizard import ERC20Options, OptionsError, generate_erc20, load_options


# ------------------------------------------------------------------------------
# Utility Helpers
# ------------------------------------------------------------------------------

def ensure(path: str):
    os.makedirs(path, exist_ok=True)


def _variant(value: str):
    """Parse CLI values like "true", "false" or a variant tag"""
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    return value


def options_from_args(args) -> ERC20Options:
    """Start from --config / --describe, then apply individual flags on top"""
    if args.config:
        opts = load_options(args.config)
    elif args.describe:
        from token_wizard.intent import extract_erc20_options
        opts = extract_erc20_options(args.describe, debug=args.debug)
    else:
        opts = ERC20Options()

    overrides = {}
    for key in ("name", "symbol", "premint", "limit"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    for key in ("burnable", "pausable", "mintable", "custodian", "flashmint"):
        if getattr(args, key):
            overrides[key] = True
    if args.no_permit:
        overrides["permit"] = False
    for key in ("restriction", "votes", "access", "upgradeable"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = _variant(value)

    if overrides:
        merged = {k: v for k, v in opts.to_dict().items() if v is not None}
        merged.update(overrides)
        opts = ERC20Options.from_dict(merged)

    if args.license or args.security_contact:
        info = opts.info.to_dict() if opts.info else {}
        if args.license:
            info["license"] = args.license
        if args.security_contact:
            info["security_contact"] = args.security_contact
        opts = replace(opts, info=ERC20Options.from_dict({"info": info}).info)

    return opts


# ------------------------------------------------------------------------------
# Runner
# ------------------------------------------------------------------------------

def run_wizard(opts: ERC20Options, outdir: str = None, debug: bool = False):
    result = generate_erc20(opts, debug=debug)

    if result.validation_errors:
        print(f"⚠️  Found {len(result.validation_errors)} validation issues:")
        for error in result.validation_errors[:5]:
            print(f"    • {error}")

    if not outdir:
        sys.stdout.write(result.solidity_code)
        return result

    ensure(outdir)
    sol_path = os.path.join(outdir, f"{result.contract_name}.sol")
    meta_path = os.path.join(outdir, "metadata.json")

    with open(sol_path, "w", encoding="utf-8") as f:
        f.write(result.solidity_code)

    with open(meta_path, "w", encoding="utf-8") as f:
        json.dump(result.to_metadata_dict(), f, indent=2)

    print(f"\n📦 Outputs saved in: {outdir}")
    print(f" - Solidity: {sol_path}")
    print(f" - Metadata: {meta_path}")
    return result


# ------------------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------------------

def main(argv=None):
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate an OpenZeppelin ERC20 contract from options",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default token printed to stdout
  python run_wizard.py

  # Options from a YAML file, written to a directory
  python run_wizard.py --config token.yaml --output out/

  # Individual flags
  python run_wizard.py --name "Gov Token" --symbol GOV --mintable --votes timestamp --access roles

  # Let a model pick the options (needs OPENAI_API_KEY)
  python run_wizard.py --describe "A pausable token with 1M premint and on-chain voting"
        """
    )
    parser.add_argument("--config", "-c", type=str, help="YAML option file")
    parser.add_argument("--describe", "-d", type=str, help="Natural language token description")
    parser.add_argument("--output", "-o", type=str, help="Directory for <Name>.sol and metadata.json")
    parser.add_argument("--name", type=str)
    parser.add_argument("--symbol", type=str)
    parser.add_argument("--premint", type=str, help="Amount minted to the deployer, e.g. 1000000 or 1.5e6")
    parser.add_argument("--limit", type=str, help="Maximum amount an account may send per day")
    parser.add_argument("--burnable", action="store_true")
    parser.add_argument("--pausable", action="store_true")
    parser.add_argument("--mintable", action="store_true")
    parser.add_argument("--custodian", action="store_true")
    parser.add_argument("--flashmint", action="store_true")
    parser.add_argument("--no-permit", action="store_true", help="Disable ERC20Permit")
    parser.add_argument("--restriction", type=str, help="true | blocklist | allowlist")
    parser.add_argument("--votes", type=str, help="true | blocknumber | timestamp")
    parser.add_argument("--access", type=str, help="ownable | roles | managed")
    parser.add_argument("--upgradeable", type=str, help="transparent | uups")
    parser.add_argument("--license", type=str)
    parser.add_argument("--security-contact", type=str)
    parser.add_argument("--debug", action="store_true", help="Print composition steps")

    args = parser.parse_args(argv)

    if args.config and args.describe:
        parser.error("--config and --describe are mutually exclusive")

    try:
        opts = options_from_args(args)
        run_wizard(opts, outdir=args.output, debug=args.debug)
    except OptionsError as e:
        print(f"❌ Invalid options: {e}", file=sys.stderr)
        for key, message in e.messages.items():
            print(f"   • {key}: {message}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Cancelled by user", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
