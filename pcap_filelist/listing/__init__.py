from .file_list import PcapFileList, build_file_list, build_full_list, build_seed_list

__all__ = ["PcapFileList", "build_file_list", "build_full_list", "build_seed_list"]
