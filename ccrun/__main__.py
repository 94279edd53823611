from ccrun.scripts.cc_run import main

if __name__ == "__main__":
    main()
