"""Remediation command templates shared by preflight and diagnosis."""

from android_selfcheck.models.target import FALLBACK_LINKER, TargetTriple, ValidationMode

TERMUX_COMPILER_INSTALL = "pkg install -y clang pkg-config"
NDK_TOOLCHAIN_VAR = "NDK_TOOLCHAIN"


def header(title: str, mode: ValidationMode | None = None) -> str:
    if mode is None:
        return f"{title}:"
    return f"{title} ({mode.value}):"


def command(line: str) -> str:
    return f"  {line}"


def ndk_toolchain_export(host_tag: str) -> str:
    return command(
        f'export {NDK_TOOLCHAIN_VAR}="$ANDROID_NDK_HOME/toolchains/llvm/prebuilt/{host_tag}/bin"'
    )


def wrapper_path(target: TargetTriple) -> str:
    return f"${NDK_TOOLCHAIN_VAR}/{target.ndk_wrapper}"


def export_wrapper_overrides(target: TargetTriple) -> list[str]:
    """Point both override variables at the NDK wrapper for ``target``."""
    return [
        command(f'export {target.cargo_linker_var}="{wrapper_path(target)}"'),
        command(f'export {target.cc_linker_var}="{wrapper_path(target)}"'),
    ]


def unset_overrides(target: TargetTriple) -> list[str]:
    return [
        command(f"unset {target.cargo_linker_var}"),
        command(f"unset {target.cc_linker_var}"),
    ]


def verify_compiler() -> str:
    return command(f"command -v {FALLBACK_LINKER}")


def install_target(target: TargetTriple) -> str:
    return f"rustup target add {target.value}"
