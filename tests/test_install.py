import json
import os

from lc3vm import install

def test_install_writes_kernel_json(monkeypatch):
    installed = {}
    def fake_install(source_dir, kernel_name, user=False, replace=False, prefix=None):
        with open(os.path.join(source_dir, 'kernel.json')) as f:
            installed.update(json.load(f))
        installed["_name"] = kernel_name
        installed["_user"] = user
        return "/kernels/" + kernel_name
    monkeypatch.setattr(install, "install_kernel_spec", fake_install)
    install.main([])
    assert installed["_name"] == "lc3vm"
    assert installed["_user"] is True
    assert installed["argv"][1:3] == ["-m", "lc3vm"]
    assert installed["display_name"] == "LC3VM"
