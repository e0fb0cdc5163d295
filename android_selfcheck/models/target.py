"""Target triple, validation mode and environment enumerations."""

from enum import Enum

# Plain compiler used as linker when nothing else is configured
FALLBACK_LINKER = "clang"


class TargetTriple(str, Enum):
    """Supported Android Rust targets."""

    AARCH64 = "aarch64-linux-android"
    ARMV7 = "armv7-linux-androideabi"

    @property
    def cargo_linker_var(self) -> str:
        """Cargo's per-target linker override, e.g. CARGO_TARGET_AARCH64_LINUX_ANDROID_LINKER."""
        token = self.value.upper().replace("-", "_")
        return f"CARGO_TARGET_{token}_LINKER"

    @property
    def cc_linker_var(self) -> str:
        """cc-rs per-target compiler override, e.g. CC_aarch64_linux_android."""
        return f"CC_{self.value.replace('-', '_')}"

    @property
    def ndk_wrapper(self) -> str:
        """Conventional NDK clang wrapper filename for this target."""
        return _NDK_WRAPPERS[self]

    @property
    def compiler_lookup_name(self) -> str:
        """Compiler name cc-rs derives from the triple when no override is set."""
        return _COMPILER_NAMES[self]


_NDK_WRAPPERS = {
    TargetTriple.AARCH64: "aarch64-linux-android21-clang",
    TargetTriple.ARMV7: "armv7a-linux-androideabi21-clang",
}

_COMPILER_NAMES = {
    TargetTriple.AARCH64: "aarch64-linux-android-clang",
    TargetTriple.ARMV7: "armv7a-linux-androideabi-clang",
}

DEFAULT_TARGET = TargetTriple.AARCH64


class ValidationMode(str, Enum):
    """How the build is expected to be performed."""

    AUTO = "auto"
    NATIVE_IN_PLACE = "native-in-place"  # on-device build with plain clang
    CROSS_FROM_HOST = "cross-from-host"  # desktop build through the NDK wrapper

    @property
    def is_concrete(self) -> bool:
        return self is not ValidationMode.AUTO


# Names accepted for compatibility with the older shell self-check
MODE_ALIASES = {
    "termux-native": ValidationMode.NATIVE_IN_PLACE,
    "ndk-cross": ValidationMode.CROSS_FROM_HOST,
}


class EnvironmentClass(str, Enum):
    """Execution environment classification."""

    TERMUX = "termux"
    NON_TERMUX = "non-termux"
