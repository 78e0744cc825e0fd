import sys

from .kernel import LC3VMKernel

if __name__ == '__main__':
    if sys.argv[1:2] == ['install']:
        from .install import main
        main(sys.argv[2:])
    else:
        from ipykernel.kernelapp import IPKernelApp
        IPKernelApp.launch_instance(kernel_class=LC3VMKernel)
