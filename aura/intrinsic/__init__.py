"""Array, string and date intrinsics, their registration and the analyzer's built-in signatures."""