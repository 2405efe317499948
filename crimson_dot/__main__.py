from crimson_dot.main import main

main()
