"""Shell completion script generation."""

from __future__ import annotations

from dotcmd.mappings.store import MappingStore

SUPPORTED_SHELLS: tuple[str, ...] = ("zsh", "bash")

SUBCOMMANDS: tuple[str, ...] = (
    "run",
    "expand",
    "complete",
    "list",
    "show",
    "search",
    "stats",
    "validate",
    "add",
    "remove",
    "generate-completion",
    "serve",
)

# Placeholders are substituted with str.replace; the scripts use ${...} freely
ZSH_TEMPLATE: str = """\
#compdef @PROG@

# @PROG@ - zsh completion
# Generated by `@PROG@ generate-completion zsh`, do not edit manually

_@PROG@_complete_chain() {
    local word="${words[CURRENT]}"
    local -a completions display_names
    local completion

    completions=("${(@f)$(@PROG@ complete -- "$word" 2>/dev/null)}")
    [[ -n "${completions[1]}" ]] || return 1

    # Show only the next token while completing to the full chain
    for completion in "${completions[@]}"; do
        display_names+=(".${completion##*.}")
    done

    compadd -S '' -r "." -d display_names -a completions
}

_@PROG@() {
    if (( CURRENT == 2 )); then
        local -a subcommands
        subcommands=(@SUBCOMMANDS@)
        _describe 'command' subcommands
        return
    fi

    case "${words[2]}" in
        run|expand|complete)
            _@PROG@_complete_chain
            ;;
        show)
            local -a base_commands
            base_commands=(@BASE_COMMANDS@)
            _describe 'base command' base_commands
            ;;
        generate-completion)
            _values 'shell' @SHELLS@
            ;;
    esac
}

compdef _@PROG@ @PROG@
@DIRECT@
"""

BASH_TEMPLATE: str = """\
# @PROG@ - bash completion
# Generated by `@PROG@ generate-completion bash`, do not edit manually

_@PROG@_completion() {
    local cur="${COMP_WORDS[COMP_CWORD]}"
    local base_commands="@BASE_COMMANDS@"
    COMPREPLY=()

    if [[ "${COMP_WORDS[0]}" == "@PROG@" ]] && (( COMP_CWORD == 1 )); then
        COMPREPLY=( $(compgen -W "@SUBCOMMANDS@" -- "$cur") )
        return 0
    fi

    if [[ "$cur" == *.* ]]; then
        COMPREPLY=( $(@PROG@ complete -- "$cur" 2>/dev/null) )
    else
        COMPREPLY=( $(compgen -W "$base_commands" -S "." -- "$cur") )
    fi
    compopt -o nospace 2>/dev/null
    return 0
}

complete -F _@PROG@_completion @PROG@
@DIRECT@
"""


def _render(template: str, replacements: dict[str, str]) -> str:
    for name, value in replacements.items():
        template = template.replace(f"@{name}@", value)
    return template


def generate_completion_script(
    shell: str,
    store: MappingStore,
    prog: str = "dotcmd",
) -> str:
    """Generate a completion script for the given shell.

    The script asks ``<prog> complete`` for candidates, and also registers
    completion for every base command so ``ls.a<TAB>`` works directly.

    Args:
        shell: "zsh" or "bash".
        store: Store whose base commands get direct completion.
        prog: Name of the installed executable.

    Raises:
        ValueError: If the shell is not supported.
    """
    shell = shell.lower()
    base_commands = sorted(store.base_commands())

    if shell == "zsh":
        direct = "\n".join(f"compdef _{prog}_complete_chain {cmd}" for cmd in base_commands)
        return _render(
            ZSH_TEMPLATE,
            {
                "PROG": prog,
                "SUBCOMMANDS": " ".join(f"'{name}'" for name in SUBCOMMANDS),
                "BASE_COMMANDS": " ".join(f"'{cmd}'" for cmd in base_commands),
                "SHELLS": " ".join(SUPPORTED_SHELLS),
                "DIRECT": direct,
            },
        )

    if shell == "bash":
        direct = "\n".join(f"complete -F _{prog}_completion {cmd}" for cmd in base_commands)
        return _render(
            BASH_TEMPLATE,
            {
                "PROG": prog,
                "SUBCOMMANDS": " ".join(SUBCOMMANDS),
                "BASE_COMMANDS": " ".join(base_commands),
                "DIRECT": direct,
            },
        )

    raise ValueError(
        f"Unsupported shell: {shell}. Supported shells: {', '.join(SUPPORTED_SHELLS)}"
    )


def get_installation_instructions(shell: str = "zsh", prog: str = "dotcmd") -> str:
    """Return instructions for installing the completion script."""
    if shell == "zsh":
        return (
            f"Installation instructions for ZSH completion:\n\n"
            f"1. Generate the completion script:\n"
            f"   {prog} generate-completion zsh > ~/.zsh/completions/_{prog}\n\n"
            f"2. Make sure ~/.zsh/completions is on your fpath in ~/.zshrc:\n"
            f"   fpath=(~/.zsh/completions $fpath)\n\n"
            f"3. Reload your shell:\n"
            f"   exec zsh\n\n"
            f"4. Test completion:\n"
            f"   {prog} run ls.<TAB>"
        )

    return (
        f"Installation instructions for BASH completion:\n\n"
        f"1. Generate the completion script:\n"
        f"   {prog} generate-completion bash > ~/.{prog}-completion.bash\n\n"
        f"2. Source it in your ~/.bashrc:\n"
        f'   echo "source ~/.{prog}-completion.bash" >> ~/.bashrc\n\n'
        f"3. Reload your shell:\n"
        f"   source ~/.bashrc\n\n"
        f"4. Test completion:\n"
        f"   {prog} run ls.<TAB>"
    )
