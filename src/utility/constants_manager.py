from dotenv import load_dotenv, find_dotenv
import os


class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default=None):
        variable = os.environ.get(variableName, "")
        if variable == "":
            if default is None:
                raise RuntimeError(f"Could not find {variableName} environment variable")
            return default
        return variable

    def get_output_dir(self):
        return self.get_variable('STEGO_OUTPUT_DIR', 'stego')

    def get_bit_planes_dir(self):
        return self.get_variable('STEGO_BIT_PLANES_DIR', 'bit_planes')

    def get_default_bit_position(self):
        value = self.get_variable('STEGO_DEFAULT_BIT_POSITION', '0')
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"STEGO_DEFAULT_BIT_POSITION must be an integer, got {value!r}") from exc

    def get_log_level(self):
        return self.get_variable('LOG_LEVEL', 'INFO').upper()
