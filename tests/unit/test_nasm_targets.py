"""Tests for the NASM bare-kernel and C-runtime targets."""

import re

from brainbrain.builder import build_program
from brainbrain.emitter import emit_to_string


def _asm(source: str, target: str, memory_size: int = 3000) -> str:
    return emit_to_string(build_program(source, memory_size), target)


LINUX_PREAMBLE = (
    "global _start\n"
    "\n"
    "section .bss\n"
    "tmp resd 1\n"
    "\n"
    "section .data\n"
    "mem db 3000 dup(0)\n"
    "\n"
    "section .text\n"
    "_start:\n"
    "xor esi, esi\n"
)

LINUX_POSTAMBLE = "mov eax, 1\nxor ebx, ebx\nint 80h\n"

LIBC_PREAMBLE = (
    "extern getchar\n"
    "extern putchar\n"
    "extern exit\n"
    "global main\n"
    "\n"
    "section .data\n"
    "mem db 3000 dup(0)\n"
    "\n"
    "section .text\n"
    "main:\n"
    "push rbx\n"
    "xor ebx, ebx\n"
)

LIBC_POSTAMBLE = "xor edi, edi\ncall exit\n"


class TestNasmLinux:
    def test_empty_program_is_preamble_and_postamble(self):
        assert _asm("", "nasm-linux") == LINUX_PREAMBLE + LINUX_POSTAMBLE

    def test_memory_size_in_data_section(self):
        assert "mem db 16 dup(0)\n" in _asm("", "nasm-linux", memory_size=16)

    def test_increment(self):
        body = _asm("+++", "nasm-linux")[len(LINUX_PREAMBLE) : -len(LINUX_POSTAMBLE)]
        assert body == "add byte [mem + esi], 3\n"

    def test_decrement_uses_wrapped_delta(self):
        assert "add byte [mem + esi], 255\n" in _asm("-", "nasm-linux")

    def test_shift_reduces_modulo_memory_size(self):
        body = _asm("<", "nasm-linux")[len(LINUX_PREAMBLE) : -len(LINUX_POSTAMBLE)]
        assert body == (
            "add esi, 2999\n"
            "xor edx, edx\n"
            "mov eax, esi\n"
            "mov ecx, 3000\n"
            "div ecx\n"
            "mov esi, edx\n"
        )

    def test_read_uses_sys_read_on_stdin(self):
        body = _asm(",", "nasm-linux")[len(LINUX_PREAMBLE) : -len(LINUX_POSTAMBLE)]
        assert body == (
            "mov al, [mem + esi]\n"
            "mov [tmp], al\n"
            "mov eax, 3\n"
            "mov ebx, 0\n"
            "mov ecx, tmp\n"
            "mov edx, 1\n"
            "int 80h\n"
            "mov al, [tmp]\n"
            "mov [mem + esi], al\n"
        )

    def test_write_uses_sys_write_on_stdout(self):
        body = _asm(".", "nasm-linux")[len(LINUX_PREAMBLE) : -len(LINUX_POSTAMBLE)]
        assert body == (
            "mov al, [mem + esi]\n"
            "mov [tmp], al\n"
            "mov eax, 4\n"
            "mov ebx, 1\n"
            "mov ecx, tmp\n"
            "mov edx, 1\n"
            "int 80h\n"
        )

    def test_loop_open_and_close(self):
        body = _asm("[-]", "nasm-linux")[len(LINUX_PREAMBLE) : -len(LINUX_POSTAMBLE)]
        assert body == (
            ".loop_1:\n"
            "cmp byte [mem + esi], 0\n"
            "je .end_1\n"
            "add byte [mem + esi], 255\n"
            "jmp .loop_1\n"
            ".end_1:\n"
        )

    def test_empty_loop_still_labelled(self):
        text = _asm("[]", "nasm-linux")
        assert ".loop_1:\n" in text
        assert ".end_1:\n" in text


class TestNasmLibc:
    def test_empty_program_is_preamble_and_postamble(self):
        assert _asm("", "nasm-libc") == LIBC_PREAMBLE + LIBC_POSTAMBLE

    def test_pointer_register_is_rbx(self):
        body = _asm("+>", "nasm-libc")[len(LIBC_PREAMBLE) : -len(LIBC_POSTAMBLE)]
        assert body == (
            "add byte [mem + rbx], 1\n"
            "add ebx, 1\n"
            "xor edx, edx\n"
            "mov eax, ebx\n"
            "mov ecx, 3000\n"
            "div ecx\n"
            "mov ebx, edx\n"
        )

    def test_read_calls_getchar(self):
        body = _asm(",", "nasm-libc")[len(LIBC_PREAMBLE) : -len(LIBC_POSTAMBLE)]
        assert body == "call getchar\nmov [mem + rbx], al\n"

    def test_write_calls_putchar(self):
        body = _asm(".", "nasm-libc")[len(LIBC_PREAMBLE) : -len(LIBC_POSTAMBLE)]
        assert body == "movzx edi, byte [mem + rbx]\ncall putchar\n"

    def test_no_raw_system_calls(self):
        assert "int 80h" not in _asm(",[.,]", "nasm-libc")


class TestLabels:
    def test_sibling_loops_get_distinct_labels(self):
        text = _asm("[-]>[-]", "nasm-linux")
        labels = re.findall(r"^(\.\w+):$", text, flags=re.MULTILINE)
        assert labels == [".loop_1", ".end_1", ".loop_3", ".end_3"]

    def test_every_label_defined_once(self):
        text = _asm("+[>[-]<[->+<]]>[.[-]]", "nasm-libc")
        labels = re.findall(r"^(\.\w+):$", text, flags=re.MULTILINE)
        assert len(labels) == len(set(labels))
        for jump_target in re.findall(r"^j(?:mp|e) (\.\w+)$", text, flags=re.MULTILINE):
            assert jump_target in labels

    def test_nested_loop_closes_inner_first(self):
        text = _asm("[[]]", "nasm-linux")
        assert text.index(".end_2:") < text.index(".end_1:")
        assert text.index("jmp .loop_2") < text.index("jmp .loop_1")

    def test_output_is_stable_across_runs(self):
        source = "++[>+<-]>."
        assert _asm(source, "nasm-linux") == _asm(source, "nasm-linux")
