"""A calculator server and command line client built on easyipc."""