from metakernel import MetaKernel

from ._version import __version__
from .console import Console
from .lc3 import LC3

class KernelConsole(Console):
    """
    Console for a machine running inside the kernel: keyboard input
    comes from the notebook's input prompt, output is collected and sent
    to the cell as text.
    """
    def __init__(self, kernel):
        self.kernel = kernel
        self.char_buffer = []
        self.output = []

    def poll_ready(self):
        ### A notebook has no background keyboard; polling prompts for input
        if len(self.char_buffer) == 0:
            self.fill_buffer()
        return True

    def fill_buffer(self):
        self.flush()
        data = self.kernel.raw_input()
        data = data.replace("\\n", "\n")
        if len(data) == 0:
            self.char_buffer = [0] # end of string
        elif len(data) == 1:
            self.char_buffer = [ord(char) & 0xFF for char in data] # single char mode
        else:
            self.char_buffer = [ord(char) & 0xFF for char in data] + [0]

    def read_byte(self):
        if len(self.char_buffer) == 0:
            self.fill_buffer()
        return self.char_buffer.pop(0)

    def write_byte(self, byte):
        self.output.append(chr(byte & 0xFF))

    def flush(self):
        if self.output:
            self.kernel.Print("".join(self.output), end="")
            self.output = []

class LC3VMKernel(MetaKernel):
    implementation = 'LC3VM'
    implementation_version = __version__
    language = 'LC3 machine code'
    language_version = '0.1'
    banner = "LC3VM - run Little Computer 3 object images"
    language_info = {
        'name': 'lc3',
        'mimetype': 'text/plain',
        'file_extension': '.obj',
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lc3 = LC3(self, KernelConsole(self))

    def get_usage(self):
        return """This is the LC3VM Jupyter kernel.

A cell of words is loaded into memory; the first word is the origin:

    x3000 xE002 xF022 xF025 x0048 x0069 x0000

LC3VM Interactive Magic Directives:

 %d                                 - toggle the instruction trace
 %dis [STARTHEX [STOPHEX]]          - dump memory as program
 %dump [STARTHEX [STOPHEX]]         - list memory in hex
 %exe [STARTHEX]                    - execute from STARTHEX (default x3000)
 %load FILE [FILE ...]              - load object images
 %mem HEXLOCATION HEXVALUE          - set memory
 %pc HEXVALUE                       - set PC
 %reg REG HEXVALUE                  - set register REG to HEXVALUE
 %regs                              - show registers
 %reset                             - reset LC3 to start state
 %save FILE STARTHEX STOPHEX        - save memory as an object image

HEX values begin with an 'x' and are composed of 4 0-F digits or letters.
"""

    def get_completions(self, info):
        token = info["help_obj"]
        matches = []
        for item in ["%d", "%dis", "%dump", "%exe", "%load", "%mem", "%pc",
                     "%reg", "%regs", "%reset", "%save"]:
            if item.startswith(token) and item not in matches:
                matches.append(item)
        return matches

    def do_execute_direct(self, code):
        try:
            self.lc3.execute(code.rstrip())
        except Exception as exc:
            self.Error(str(exc))
        except KeyboardInterrupt:
            self.Error("Keyboard Interrupt!")
        finally:
            self.lc3.console.flush()

    def do_is_complete(self, code):
        if code:
            if code.split()[-1].strip() != "":
                return {'status' : 'incomplete',
                        'indent': '    '}
            else:
                return {'status' : 'complete'}
        else:
            return {'status' : 'incomplete'}

    def repr(self, data):
        return repr(data)
